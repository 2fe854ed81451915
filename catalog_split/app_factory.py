from __future__ import annotations

from typing import Optional

from flask import Flask

from catalog_split.config.ini_config import AppSettings, IniConfig
from catalog_split.repositories.module_repository import ModuleRepository
from catalog_split.services.module_renderer import TypeScriptModuleRenderer
from catalog_split.services.split_service import SplitService
from catalog_split.web.routes import create_blueprint

#############################
#
# Composition root: settings are loaded once here and every dependency is
# constructed and passed explicitly. Nothing resolves services from a global.
#
# config/        INI -> AppSettings
# domain/        dataclasses + exceptions, no I/O
# services/      extractor (pure), array locator, renderer strategy, split orchestration
# repositories/  generated module files on disk
# web/           Flask blueprint, HTTP only
######################################################################


def build_split_service(settings: AppSettings) -> SplitService:
    module_repo = ModuleRepository(
        output_dir=settings.output_dir,
        extension=settings.extension,
    )

    renderer = TypeScriptModuleRenderer(
        extension=settings.extension,
        type_name=settings.type_name,
        type_import=settings.type_import,
    )

    return SplitService(
        module_repo=module_repo,
        renderer=renderer,
        array_key=settings.array_key,
        strict=settings.strict,
        max_source_chars=settings.max_source_chars,
        write_workers=settings.write_workers,
        write_retries=settings.write_retries,
    )


def create_app(settings: Optional[AppSettings] = None) -> Flask:
    if settings is None:
        settings = IniConfig.from_env_or_default().load_settings()

    split_service = build_split_service(settings)

    app = Flask(__name__)
    app.register_blueprint(create_blueprint(split_service, split_service.module_repo, settings))

    app.config["HOST"] = settings.flask_host
    app.config["PORT"] = settings.flask_port
    app.config["DEBUG"] = settings.flask_debug

    return app
