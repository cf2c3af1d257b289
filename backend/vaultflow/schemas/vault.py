from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NewVaultChoice = Literal["new", "existing"] | None


class DatasourceConfig(BaseModel):
    # Backend-specific fields (path, token, ...) ride along as extras.
    type: str

    model_config = ConfigDict(extra="allow", frozen=True)


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AddVaultPayload(_WireModel):
    create_new: bool
    datasource_config: DatasourceConfig
    master_password: str
    file_name_override: str | None = None
    request_id: str


class ReplyEnvelope(_WireModel):
    ok: bool
    error: str | None = None
    source_id: str | None = Field(default=None, alias="sourceID")
    request_id: str | None = None


class VaultTargetParameters(_WireModel):
    filename: str
    create_new: bool


class VaultAddRequest(BaseModel):
    datasource_config: DatasourceConfig
    master_password: str
    create_new: bool
    file_name_override: str | None = None


class VaultAddResponse(BaseModel):
    source_id: str


class VaultStatusResponse(BaseModel):
    busy: bool
    prompt_visible: bool


class VaultChoiceRequest(BaseModel):
    choice: NewVaultChoice = None
