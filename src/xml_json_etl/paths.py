import os
from pathlib import Path


class Paths:
    @staticmethod
    def root() -> Path:
        """Get the project root directory.

        Can be overridden with XML2JSON_ROOT environment variable.
        Defaults to current working directory.
        """
        return Path(os.getenv("XML2JSON_ROOT", "."))

    @staticmethod
    def data_root() -> Path:
        """Get the data directory root.

        Can be overridden with XML2JSON_DATA_ROOT environment variable.
        Defaults to 'data' relative to project root.
        """
        data_root_env = os.getenv("XML2JSON_DATA_ROOT")
        if data_root_env:
            return Path(data_root_env)
        return Paths.root() / "data"

    @staticmethod
    def xml() -> Path:
        return Paths.data_root() / "xml"

    @staticmethod
    def json() -> Path:
        return Paths.data_root() / "json"

    @staticmethod
    def configs() -> Path:
        return Paths.root() / "configs"

    @staticmethod
    def ensure_all():
        for p in [
            Paths.data_root(),
            Paths.xml(),
            Paths.json(),
        ]:
            p.mkdir(parents=True, exist_ok=True)
            yield p
