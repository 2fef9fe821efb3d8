from .json_file_store import CorruptRecordError, JsonFileStore

__all__ = ["CorruptRecordError", "JsonFileStore"]
