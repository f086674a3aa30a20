"""Health document models."""

from pydantic import BaseModel, ConfigDict

from forge_status.models.fields import JsonInt, ServiceURL, StrictBool, StrictStr, extract_host


class ServiceCheck(BaseModel):
    """Reachability check of a single service endpoint."""

    model_config = ConfigDict(frozen=True)

    url: ServiceURL
    ok: StrictBool
    result_code: JsonInt
    result_str: StrictStr

    @property
    def host(self) -> str:
        return extract_host(self.url)


class InstanceHealth(BaseModel):
    """One running Cardinal/Nakama pair in a region."""

    model_config = ConfigDict(frozen=True)

    region: StrictStr
    instance: JsonInt
    cardinal: ServiceCheck
    nakama: ServiceCheck
