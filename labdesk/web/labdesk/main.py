"""Main entry point for the labdesk web application."""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import labdesk
from labdesk.core import BootConfiguration, di, LabdeskContainer
from labdesk.core.config.web import LabdeskWebSettings

from .route import router

BootVariable = "__Labdesk_BOOT"


@di.inject
def _create_app(
    config: LabdeskWebSettings = di.Provide["config.web.labdesk", di.as_(LabdeskWebSettings)],
) -> FastAPI:
    app = FastAPI(
        title="Labdesk",
        description="Role-based lab management: coursework, grading and progress reports",
        version=labdesk.__version__,
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(router)
    return app


def create_app() -> FastAPI:
    """Factory function for uvicorn."""
    boot_vars = os.getenv(BootVariable)
    if boot_vars:
        boot_cf = BootConfiguration.model_validate_json(boot_vars)
        ct = LabdeskContainer()
        LabdeskContainer.boot(ct, **dict(boot_cf))
        return _create_app(config=LabdeskWebSettings(**ct.config.web.labdesk()))
    return _create_app()
