from pydantic import BaseModel, Field, computed_field


class ServiceHealthResponse(BaseModel):
    name: str = Field(description="Dependency name")
    url: str = Field(description="Probed URL")
    status: bool = Field(description="Whether the dependency answered")


class HealthResponse(BaseModel):
    services: list[ServiceHealthResponse] = Field(
        default_factory=list, description="Dependencies health status"
    )

    @computed_field
    def status(self) -> bool:
        return all(service.status for service in self.services)
