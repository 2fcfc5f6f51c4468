from photostock.models.result import ResultModel, Status, find_existing_inv_numbers

__all__ = ["ResultModel", "Status", "find_existing_inv_numbers"]
