from ._log_helper import get_logger
from .data_model import DataModel, DataModelField

__all__ = [
    "DataModel",
    "DataModelField",
    "get_logger",
]
