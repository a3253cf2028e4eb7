"""
Model Enums
"""

from enum import Enum


class MovementType(Enum):
    ENTRADA = "entrada"  # receipt
    SALIDA = "salida"  # issue
    TRANSFERENCIA = "transferencia"  # transfer
    AJUSTE = "ajuste"  # adjustment

    @property
    def folio_prefix(self):
        """First three letters of the type, uppercased (ENT, SAL, TRA, AJU)"""
        return self.value[:3].upper()

    @classmethod
    def parse(cls, value):
        """Accept an enum member, its value or its name"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid movement type: {value!r}")
        try:
            return cls(value.lower())
        except ValueError:
            try:
                return cls[value.upper()]
            except KeyError:
                raise ValueError(f"Invalid movement type: {value!r}") from None


class MovementStatus(Enum):
    COMPLETED = "completed"
    PENDING = "pending"  # modeled, never produced by posting
    CANCELLED = "cancelled"  # modeled, never produced by posting
