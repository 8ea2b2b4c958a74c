from __future__ import annotations

"""Native-app configuration schema.

CONTRACT
- Inputs: tauri.conf.json text or dict
- Outputs:
  - Validated TauriConf model
- Invariants:
  - Field names follow the on-disk camelCase keys (via aliases)
  - Unknown keys are allowed; only the keys the bootstrap relies on are checked
- Failure:
  - Raises ValidationError on missing or mistyped keys
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Conf(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class BuildSection(_Conf):
    frontend_dist: str = Field(alias="frontendDist")
    dev_url: str = Field(alias="devUrl")
    before_dev_command: str | None = Field(default=None, alias="beforeDevCommand")
    before_build_command: str | None = Field(default=None, alias="beforeBuildCommand")


class IosBundle(_Conf):
    development_team: str = Field(alias="developmentTeam")
    minimum_system_version: str = Field(alias="minimumSystemVersion")


class BundleSection(_Conf):
    active: bool = True
    ios: IosBundle = Field(alias="iOS")
    targets: str | list[str] | None = None
    icon: list[str] = Field(default_factory=list)


class TauriConf(_Conf):
    product_name: str = Field(alias="productName")
    version: str
    identifier: str
    build: BuildSection
    app: dict[str, Any] = Field(default_factory=dict)
    bundle: BundleSection
