from settings import qdrant_settings
from usecases import HealthUsecase


def get_health_usecase() -> HealthUsecase:
    return HealthUsecase(qdrant_url=qdrant_settings.url)
