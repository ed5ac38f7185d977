from quizzle_app.extensions import scheduler

from .services.token_store import EXTENSION_KEY


def purge_expired_tokens():
    """Drop expired session tokens from the app's token store."""

    # Scheduler gọi hàm này ngoài request, cần app context.
    app = scheduler.app
    with app.app_context():
        store = app.extensions.get(EXTENSION_KEY)
        if store is None:
            return 0
        purged = store.purge_expired()
        app.logger.debug(f"[AUTH] Purged {purged} expired session token(s)")
        return purged
