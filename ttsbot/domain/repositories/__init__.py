from .option_repository import OptionRepository

__all__ = ["OptionRepository"]
