from .sqlalchemy_option_repository import SqlAlchemyOptionRepository

__all__ = ["SqlAlchemyOptionRepository"]
