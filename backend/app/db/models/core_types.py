import enum


class OrderStatus(str, enum.Enum):
    # Une commande n'existe que si l'allocation a réussi : un seul état.
    allocated = "ALLOCATED"
