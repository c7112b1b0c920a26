# models/base.py
from sqlalchemy.orm import DeclarativeBase, declared_attr


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Models that do not set __tablename__ get one derived from the class name.
     """

     @declared_attr.directive
     def __tablename__(cls) -> str:
          """
          Automatically generate table name from class name.
          Example: MeterReading -> meter_readings
          """
          import re
          name = re.sub(r'(?<!^)(?=[A-Z])', '_', cls.__name__).lower()
          # Pluralize (simple version)
          if name.endswith('y'):
               return name[:-1] + 'ies'
          elif name.endswith('s'):
               return name + 'es'
          return name + 's'

     def to_dict(self) -> dict:
          """Column values keyed by attribute name."""
          return {c.key: getattr(self, c.key) for c in self.__mapper__.column_attrs}
