from sqlalchemy.orm import DeclarativeBase


class AbstractSQLModel(DeclarativeBase):
    """Declarative base shared by every table in the project."""

    def to_dict(self) -> dict:
        return {
            column.key: getattr(self, column.key)
            for column in self.__mapper__.column_attrs
        }
