"""shared fixtures for the pkgcache test suite."""
import io
import sys
import tarfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def build_archive(files: dict) -> bytes:
    """build gzip-compressed tar bytes from a {relative path: text} mapping."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, text in files.items():
            data = text.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


@pytest.fixture
def package_archive() -> bytes:
    """a small but complete package archive."""
    return build_archive({
        "typst.toml": '[package]\nname = "example"\nversion = "1.0.0"\nentrypoint = "lib.typ"\n',
        "lib.typ": "#let hello = [Hello]\n",
        "src/util.typ": "#let twice(x) = x + x\n",
    })
