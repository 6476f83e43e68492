from usecases.chat import ChatUsecase
from usecases.health import HealthUsecase

__all__ = ["ChatUsecase", "HealthUsecase"]
