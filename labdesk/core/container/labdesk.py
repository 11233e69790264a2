from __future__ import annotations

import datetime
import os
import sys
import types
from pathlib import Path

import pydantic as p
import xdg_base_dirs as xdg
from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Configuration, Container, Object, Provider, Resource, Singleton

import labdesk
from labdesk.lib import NotReady
from labdesk.model import BaseModel, DeploymentEnvironment

from ..config import Secrets, Settings
from ..di import register_loader_containers
from ..provider import LoggingProvider, provide_logging, TimestampProvider
from .auth import AuthContainer
from .locale import LocaleContainer
from .operation import OperationContainer
from .storage import StorageContainer


def provide_xdg_state() -> Path:
    stp = xdg.xdg_state_home() / "labdesk"
    stp.mkdir(parents=True, exist_ok=True)
    return stp


class BootConfiguration(BaseModel):
    debug: bool
    env: DeploymentEnvironment
    config_root: p.AnyUrl
    override: tuple[str, ...]


class LabdeskContainer(DeclarativeContainer):
    config: Configuration = Configuration()
    secrets: Configuration = Configuration()

    debug: Provider[bool] = Singleton(bool)
    env: Provider[DeploymentEnvironment] = Singleton(DeploymentEnvironment)
    root: Object[NotReady | Path] = Object(NotReady())
    state_path: Provider[Path] = Resource(provide_xdg_state)
    utcnow: Provider[TimestampProvider] = Object(lambda: datetime.datetime.now(datetime.UTC))

    logging: Provider[LoggingProvider] = Resource(provide_logging, config=config.logging, debug=debug)
    storage: Provider[StorageContainer] = Container(
        StorageContainer, config=config.storage, logging=logging, utcnow=utcnow, state_path=state_path
    )

    # token settings live with the web application, the session store with storage
    auth: Provider[AuthContainer] = Container(
        AuthContainer,
        config=config.web.labdesk.auth,
        secrets=secrets.auth,
        store=storage.store,
        session_store=storage.session_store,
        utcnow=utcnow,
    )
    operation: Provider[OperationContainer] = Container(OperationContainer, config=config.operation)
    locale: Provider[LocaleContainer] = Container(LocaleContainer, config=config.locale)

    _boot_config: Provider[BootConfiguration | NotReady] = Object(NotReady())

    @staticmethod
    def boot(
        ct: LabdeskContainer,
        /,
        debug: bool,
        env: DeploymentEnvironment,
        config_root: p.FileUrl,
        override: tuple[str, ...] | None = None,
        wiring: tuple[str | types.ModuleType, ...] | None = None,
    ):
        if config_root.scheme != "file":
            raise ValueError(f"unsupported scheme for config root: {config_root.scheme}")
        ps = Settings(env=env, root=config_root, override=override or ())
        ct.config.from_pydantic(ps)
        ct.debug.override(debug)
        ct.env.override(env)
        ct.root.override(Path(os.path.dirname(labdesk.__file__)).parent)

        logger = ct.logging().get_logger()
        for ov in ps.override:
            k, v = ov.split("=", 1)
            logger.info(
                "overriding configuration parameter",
                extra={
                    "key": k,
                    "value": v,
                },
            )

        secrets = Secrets(env=env, root=config_root)
        if secrets.auth is None:
            logger.warning("no auth secrets found; sign-in and tokens are unavailable", extra={"env": env.value})
        ct.secrets.from_pydantic(secrets)

        ct.wire(packages=["labdesk"])
        if wiring:
            ct.wire(modules=wiring)
        if imported := [m for name, m in sys.modules.items() if name.startswith("labdesk.") and m is not None]:
            ct.wire(modules=imported)
        register_loader_containers(ct, packages=["labdesk"])

        logger.debug(
            "configuration finished",
            extra={
                "config": str(config_root),
                "env": env.value,
            },
        )
        ct._boot_config.override(BootConfiguration(debug=debug, env=env, config_root=config_root, override=override or ()))
