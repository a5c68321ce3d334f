"""Pydantic models describing the Kubernetes API payloads we consume."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class KubernetesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(KubernetesBaseModel):
    name: str
    namespace: str = ""
    uid: str = ""
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)

    @field_validator("namespace", "uid", mode="before")
    @classmethod
    def _none_to_blank(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def _none_to_empty(cls, value: object) -> object:
        return {} if value is None else value


class ObjectPayload(KubernetesBaseModel):
    api_version: str = Field(alias="apiVersion")
    kind: str
    metadata: ObjectMeta

    @property
    def group(self) -> str:
        group, _, _version = self.api_version.rpartition("/")
        return group


class ObjectListPayload(KubernetesBaseModel):
    items: list[ObjectPayload] = Field(default_factory=list)


class APIResource(KubernetesBaseModel):
    name: str
    kind: str
    namespaced: bool

    @property
    def is_subresource(self) -> bool:
        return "/" in self.name


class APIResourceList(KubernetesBaseModel):
    group_version: str = Field(alias="groupVersion")
    resources: list[APIResource] = Field(default_factory=list)


class APIVersions(KubernetesBaseModel):
    versions: list[str] = Field(default_factory=list)


class GroupVersionForDiscovery(KubernetesBaseModel):
    group_version: str = Field(alias="groupVersion")
    version: str


class APIGroup(KubernetesBaseModel):
    name: str
    versions: list[GroupVersionForDiscovery] = Field(default_factory=list)
    preferred_version: GroupVersionForDiscovery | None = Field(
        default=None, alias="preferredVersion"
    )

    def ordered_versions(self) -> list[GroupVersionForDiscovery]:
        if self.preferred_version is None:
            return list(self.versions)
        preferred = self.preferred_version.version
        rest = [entry for entry in self.versions if entry.version != preferred]
        return [self.preferred_version, *rest]


class APIGroupList(KubernetesBaseModel):
    groups: list[APIGroup] = Field(default_factory=list)


class StatusPayload(KubernetesBaseModel):
    message: str | None = None
    reason: str | None = None
    code: int | None = None
