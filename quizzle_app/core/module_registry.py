"""Utilities for declaratively registering application modules.

The registry allows each blueprint/module to be described with metadata so that
module discovery and registration can be automated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    """Describe how a blueprint-backed module is registered with the app."""

    import_path: str
    attribute: str
    url_prefix: Optional[str] = None
    version: str = "1.0"
    setup_path: Optional[str] = None

    def load_blueprint(self) -> Blueprint:
        """Import and return the blueprint described by this definition."""

        module = import_string(self.import_path)
        blueprint = getattr(module, self.attribute, None)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                "Expected attribute '%s' in '%s' to be a Flask Blueprint, got %r instead"
                % (self.attribute, self.import_path, type(blueprint))
            )
        return blueprint

    def run_setup(self, app: Flask) -> None:
        """Call the module's ``setup_module(app)`` hook when one is declared."""

        if self.setup_path:
            setup = import_string(self.setup_path)
            setup(app)


def register_modules(app: Flask, modules: Sequence[ModuleDefinition]) -> None:
    """Register all modules in the provided iterable with the Flask app."""

    for module in modules:
        blueprint = module.load_blueprint()
        app.register_blueprint(blueprint, url_prefix=module.url_prefix)
        module.run_setup(app)
        app.logger.debug(
            "Registered module %s (version %s) at prefix %s",
            module.import_path,
            module.version,
            module.url_prefix or "<root>",
        )


def register_default_modules(app: Flask) -> None:
    """Convenience helper that registers the built-in Quizzle modules."""

    register_modules(app, DEFAULT_MODULES)


DEFAULT_MODULES: Iterable[ModuleDefinition] = (
    ModuleDefinition(
        "quizzle_app.modules.ops.routes", "ops_bp", url_prefix="/api", version="1.0",
    ),
    ModuleDefinition(
        "quizzle_app.modules.auth.routes",
        "auth_bp",
        url_prefix="/api/auth",
        version="1.0",
        setup_path="quizzle_app.modules.auth.setup_module",
    ),
    ModuleDefinition(
        "quizzle_app.modules.question_bank.routes", "question_bank_bp", url_prefix="/api", version="1.0",
    ),
    ModuleDefinition(
        "quizzle_app.modules.quiz.routes",
        "quiz_bp",
        url_prefix="/api",
        version="1.0",
        setup_path="quizzle_app.modules.quiz.setup_module",
    ),
    ModuleDefinition(
        "quizzle_app.modules.progress.routes", "progress_bp", url_prefix="/api", version="1.0",
    ),
)
