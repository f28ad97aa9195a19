from pathlib import Path
from typing import Optional

import platformdirs

APP_NAME = "typst"
HOST = "https://packages.typst.org"
DEFAULT_NAMESPACE = "preview"
MIRROR_CONFIG_NAME = "pkg-mirror.toml"

def index_url() -> str:
    """url of the package index for the default namespace."""
    return f"{HOST}/{DEFAULT_NAMESPACE}/index.json"

def default_mirror_template() -> str:
    return f"{HOST}/{DEFAULT_NAMESPACE}/$name-$version.tar.gz"

def get_mirror_config_path() -> Optional[Path]:
    """get the path of the user mirror configuration, if a config dir is known."""
    try:
        config_dir = platformdirs.user_config_dir()
    except (OSError, RuntimeError):
        # no home / config directory on this platform
        return None
    if not config_dir:
        return None
    return Path(config_dir) / APP_NAME / MIRROR_CONFIG_NAME
