"""
Central Signal Registry for Event-Driven Architecture.

Uses blinker (Flask's signalling library) so the quiz flow does not need to
know who stores or reacts to its results.

Usage:
    # Publisher (sender)
    from quizzle_app.core.signals import quiz_completed
    quiz_completed.send(None, result=result)

    # Subscriber (receiver) - in module's events.py
    @quiz_completed.connect
    def on_quiz_completed(sender, **kwargs):
        ...
"""
from blinker import Namespace

quiz_signals = Namespace()

# Signal: Fired when a new quiz session is created
# Payload: user_id, session_id, quiz_type, total_questions
quiz_started = quiz_signals.signal('quiz_started')

# Signal: Fired once per timed session when the remaining time crosses the warning threshold
# Payload: user_id, session_id, remaining_seconds
quiz_time_warning = quiz_signals.signal('quiz_time_warning')

# Signal: Fired exactly once when a session transitions to Complete
# Payload: result (QuizResult), forced (bool, True when the time limit expired)
quiz_completed = quiz_signals.signal('quiz_completed')

# ============================================
# Result Store Signals
# ============================================
result_signals = Namespace()

# Payload: user_id, result_id
result_persisted = result_signals.signal('result_persisted')

# Payload: user_id, error (str)
result_persist_failed = result_signals.signal('result_persist_failed')
