from .json_writer import dump_json, dumps_json, select_root, write_json

__all__ = ["dump_json", "dumps_json", "select_root", "write_json"]
