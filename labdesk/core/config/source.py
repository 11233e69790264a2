import functools
import typing as t
from pathlib import Path

import pydantic as p
import yaml
from pydantic_settings import PydanticBaseSettingsSource
from pydantic_settings.sources import SettingsError

import labdesk.lib.util as util
from labdesk.model import DeploymentEnvironment


class CurrentState(t.TypedDict, total=False):
    root: t.Required[p.AnyUrl]
    env: t.Required[DeploymentEnvironment]


class SettingsCurrentState(CurrentState, total=False):
    override: t.Required[tuple[str, ...]]


class SettingsSource(PydanticBaseSettingsSource):
    def __call__(self) -> dict[str, t.Any]:
        # we expect init kwargs to have config root and env in them
        data: dict[str, t.Any] = {}

        for field_name, field in self.settings_cls.model_fields.items():
            try:
                field_value, field_key, value_is_complex = self.get_field_value(field, field_name)
                field_value = self.prepare_field_value(field_name, field, field_value, value_is_complex)
            except KeyError:
                continue
            except ValueError as e:
                raise SettingsError(f"error parsing value for field {field_name!r} from source {self!r}") from e
            except Exception as e:
                raise SettingsError(f"error getting value for field {field_name!r} from source {self!r}") from e

            data[field_key] = field_value
        return data


class OverrideSettingsSource(SettingsSource):
    """
    `-o key.path=value` options, each value parsed as YAML. Only the keys
    named are produced; the YAML files fill in the rest.
    """

    @functools.cached_property
    def parsed_options(self) -> dict[str, t.Any]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        override = current_state["override"]
        od: dict[str, t.Any] = {}
        for o in override:
            k, v = [s.strip() for s in o.split("=", 1)]

            target = od
            path = k.split(".")
            for key in path[:-1]:
                if key not in target:
                    target[key] = {}
                target = target[key]
            key = path[-1]
            target[key] = yaml.safe_load(v)
        return od

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        skip_keys = {"env", "root", "override"}
        if field_name in skip_keys or field_name not in self.parsed_options:
            raise KeyError(field_name)
        value = self.parsed_options[field_name]
        return value, field_name, isinstance(value, dict)

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        return value


class YAMLCascadingSettingsSource(SettingsSource):
    @functools.cached_property
    def load_paths(self) -> list[Path]:
        current_state = t.cast(SettingsCurrentState, self.current_state)
        root = current_state["root"]
        assert root.scheme == "file" and root.path is not None, "root is not a legible location of YAML files"
        env = current_state["env"]
        paths = [Path(root.path)]
        if env is not DeploymentEnvironment.Local:
            # we don't have a special directory for local/ that's just root
            paths.append(Path(root.path) / "env.d" / env.value)
        return paths

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        yamls: list[str] = []
        for path in self.load_paths:
            fn = path / f"{field_name}.yaml"
            if fn.exists():
                yamls.append(fn.read_text(encoding="utf8"))
        if not yamls:
            raise KeyError(field_name)
        return yamls, field_name, True

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        if not value_is_complex:
            return super().prepare_field_value(field_name, field, value, value_is_complex)

        # for complex values, we expect to be given a list[str] representing
        # the yamls encountered along the load_paths
        if not isinstance(value, list):
            raise ValueError(field_name)
        yamls = t.cast(list[str], value)
        # later paths refine earlier ones key by key
        merged: t.Any = None
        for doc in yamls:
            loaded = yaml.safe_load(doc)
            if isinstance(merged, dict) and isinstance(loaded, dict):
                merged = util.deep_update(t.cast(dict[t.Any, t.Any], merged), t.cast(dict[t.Any, t.Any], loaded))
            else:
                merged = loaded
        return merged


class YAMLSecretsSource(SettingsSource):
    """
    Read `secrets.yaml` from the config root, or from `env.d/<env>/` for any
    environment other than local. A missing file yields no secrets.
    """

    @functools.cached_property
    def load_path(self) -> Path:
        current_state = t.cast(CurrentState, self.current_state)
        root = current_state["root"]
        assert root.scheme == "file" and root.path is not None, "root is not a legible location of YAML files"
        rootp = Path(root.path)
        env = current_state["env"]
        if env is not DeploymentEnvironment.Local:
            # we don't have a special directory for local/ that's just the root
            return rootp / "env.d" / env.value
        return rootp

    @functools.cached_property
    def secrets(self) -> dict[str, t.Any]:
        sp = self.load_path / "secrets.yaml"
        if not sp.exists():
            return {}
        loaded = yaml.safe_load(sp.read_text(encoding="utf8"))
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise SettingsError(f"secrets file must contain a mapping: {sp}")
        return t.cast(dict[str, t.Any], loaded)

    def get_field_value(self, field: p.fields.FieldInfo, field_name: str) -> tuple[t.Any, str, bool]:
        skip_keys = {"env", "root", "override"}
        # check skip_keys before touching self.secrets, which needs root to
        # compute load_path
        if field_name in skip_keys or field_name not in self.secrets:
            raise KeyError(field_name)
        val = self.secrets[field_name]
        return val, field_name, isinstance(val, dict)

    def prepare_field_value(
        self, field_name: str, field: p.fields.FieldInfo, value: t.Any, value_is_complex: bool
    ) -> t.Any:
        return value
