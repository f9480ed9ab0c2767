import enum


class OrderState(str, enum.Enum):
    open = "OUVERTE"
    shipped = "EXPEDIEE"
