import re

from sqlalchemy import MetaData
from sqlalchemy.orm import declared_attr, registry


def camel_to_snake(string: str) -> str:
    """
    CustomerRow -> customer_row, HTTPLog -> http_log
    """
    string = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', string)
    return re.sub(r'([a-z\d])([A-Z])', r'\1_\2', string).lower()


naming_convention = {
    "all_column_names": lambda constraint, table: "_".join([column.name for column in constraint.columns.values()]),
    "ix": "ix_%(table_name)s_%(all_column_names)s",
    "uq": "uq_%(table_name)s_%(all_column_names)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(all_column_names)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)
mapper_registry = registry(metadata=metadata)

_Base = mapper_registry.generate_base()


class Base(_Base):
    __abstract__ = True


class TablenameMixin:
    @declared_attr.directive
    def __tablename__(cls) -> str:
        return camel_to_snake(cls.__name__)
