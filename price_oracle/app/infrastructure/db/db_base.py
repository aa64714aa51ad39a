from sqlalchemy.orm import DeclarativeBase


class BaseDB(DeclarativeBase):
    pass
