from enums.role import Role

__all__ = ["Role"]
