import re
from typing import Any, NamedTuple

from packaging.version import Version
from pydantic import BaseModel, ConfigDict, field_validator

_VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+", re.ASCII)


class PackageVersion(NamedTuple):
    """a package version: major.minor.patch, ordered by its components."""
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "PackageVersion":
        # plain digits only; no prefix, suffix or surrounding whitespace
        if not _VERSION_PATTERN.fullmatch(text):
            raise ValueError(f"version must be of the form major.minor.patch: {text!r}")
        return cls(*Version(text).release)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def _coerce_version(value: Any) -> Any:
    if isinstance(value, str):
        return PackageVersion.parse(value)
    return value


class VersionlessPackageSpec(BaseModel):
    """a package without a version, used for latest-version lookups."""
    model_config = ConfigDict(frozen=True)

    namespace: str
    name: str

    def at(self, version: PackageVersion) -> "PackageSpec":
        return PackageSpec(namespace=self.namespace, name=self.name, version=version)

    def __str__(self) -> str:
        return f"@{self.namespace}/{self.name}"


class PackageSpec(BaseModel):
    """identifies an exact installable package."""
    model_config = ConfigDict(frozen=True)

    namespace: str
    name: str
    version: PackageVersion

    @field_validator("version", mode="before")
    @classmethod
    def parse_version(cls, value: Any) -> Any:
        return _coerce_version(value)

    def versionless(self) -> VersionlessPackageSpec:
        return VersionlessPackageSpec(namespace=self.namespace, name=self.name)

    def __str__(self) -> str:
        return f"@{self.namespace}/{self.name}:{self.version}"


class PackageInfo(BaseModel):
    """one entry of the remote package index."""
    name: str
    version: PackageVersion

    @field_validator("version", mode="before")
    @classmethod
    def parse_version(cls, value: Any) -> Any:
        return _coerce_version(value)
