"""Base factory configuration for polyfactory."""

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from src.tracker.models import utc_now


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Primary keys are left to the database (integer autoincrement) and
    foreign keys are always set explicitly by the caller.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = False
    __set_primary_key__ = False


__all__ = ["BaseFactory", "utc_now"]
