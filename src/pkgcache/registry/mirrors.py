"""namespace -> download url template registry."""

import logging
import threading
import tomllib
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, RootModel, ValidationError
from rich.markup import escape

from ..config import DEFAULT_NAMESPACE, default_mirror_template, get_mirror_config_path
from ..ui.progress import ProgressManager

logger = logging.getLogger(__name__)


class MirrorEntry(BaseModel):
    """a download url template containing the literal placeholders $name and $version."""
    model_config = ConfigDict(frozen=True)

    path: str

    def url_for(self, name: str, version: str) -> str:
        return self.path.replace("$name", name).replace("$version", version)


class MirrorConfigFile(RootModel[Dict[str, MirrorEntry]]):
    """layout of pkg-mirror.toml: one table per namespace with a `path` key."""
    pass


class MirrorRegistry:
    """immutable mapping from namespace to mirror, ordered by namespace."""

    def __init__(self, mirrors: Mapping[str, MirrorEntry]):
        self._mirrors = {namespace: mirrors[namespace] for namespace in sorted(mirrors)}

    @classmethod
    def default(cls) -> "MirrorRegistry":
        return cls({DEFAULT_NAMESPACE: MirrorEntry(path=default_mirror_template())})

    @classmethod
    def load(
        cls,
        config_path: Optional[Path],
        progress_manager: Optional[ProgressManager] = None,
    ) -> "MirrorRegistry":
        """
        build the registry from the defaults overlaid with a user configuration file.
        
        a missing file keeps the defaults. an unreadable or malformed file is reported
        and also keeps the defaults; it never raises.
        """
        mirrors = dict(cls.default()._mirrors)
        if config_path is None or not config_path.exists():
            return cls(mirrors)

        progress_manager = progress_manager or ProgressManager()
        logger.debug(f"found mirror configuration at {config_path}")
        progress_manager.print("[blue]Found pkg-mirror configuration![/blue]")

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            logger.warning(f"could not read mirror configuration {config_path}: {e}")
            progress_manager.print(f"[red]Could not read configuration file![/red] {escape(str(e))}")
            return cls(mirrors)
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"could not parse mirror configuration {config_path}: {e}")
            progress_manager.print(f"[red]Error parsing mirror configuration![/red] {escape(str(e))}")
            return cls(mirrors)

        try:
            configured = MirrorConfigFile.model_validate(data).root
        except ValidationError as e:
            logger.warning(f"invalid mirror configuration {config_path}: {e}")
            progress_manager.print(f"[red]Error parsing mirror configuration![/red] {escape(str(e))}")
            return cls(mirrors)

        # configured mirrors win over the defaults
        for namespace, entry in configured.items():
            logger.debug(f"mirror for @{namespace}: {entry.path}")
            mirrors[namespace] = entry

        return cls(mirrors)

    def resolve(self, namespace: str) -> Optional[MirrorEntry]:
        return self._mirrors.get(namespace)

    def url_for(self, namespace: str, name: str, version: str) -> str:
        entry = self.resolve(namespace)
        if entry is None:
            raise KeyError(f"no mirror configured for namespace '{namespace}'")
        return entry.url_for(name, version)

    def namespaces(self) -> List[str]:
        return list(self._mirrors)

    def items(self):
        return self._mirrors.items()

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._mirrors


_registry: Optional[MirrorRegistry] = None
_registry_lock = threading.Lock()


def get_mirror_registry() -> MirrorRegistry:
    """get the process-wide registry, loading the user configuration on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = MirrorRegistry.load(get_mirror_config_path())
    return _registry


def reset_mirror_registry() -> None:
    """forget the process-wide registry so the next access reloads it."""
    global _registry
    with _registry_lock:
        _registry = None
