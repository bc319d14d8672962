from enum import Enum


class PaymentTerms(str, Enum):
    NET15 = "NET15"
    NET30 = "NET30"
    NET45 = "NET45"
    NET60 = "NET60"
    COD = "COD"
