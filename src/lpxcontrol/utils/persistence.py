"""JSON persistence for pydantic models such as `AppConfig`.

Writes go to a `.tmp` sibling that is then renamed over the target, and the
previous file is kept as `.bak`. A file that exists but cannot be parsed is
never replaced automatically.
"""

import logging
import shutil
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from lpxcontrol.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """Stateless load/save helpers."""

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Read and validate a model from `path`.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigFileInvalidError: If the file is empty, unreadable or not JSON
            ConfigValidationError: If a value fails validation
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise
        except OSError as e:
            raise ConfigFileInvalidError(str(path), f"Cannot read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"{path} is not a valid {model_type.__name__}: {e.error_count()} error(s)")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(model: BaseModel, path: Path) -> None:
        """
        Write `model` to `path`, keeping the previous contents as `<path>.bak`.

        Raises:
            ConfigurationError: If the file or its backup cannot be written
        """
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            if path.exists():
                shutil.copy2(path, path.with_suffix(path.suffix + ".bak"))

            temp_path.write_text(model.model_dump_json(indent=2), encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            logger.error(f"Saving {type(model).__name__} to {path} failed: {e}")
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {path}",
                technical_message=f"Write of {path} failed: {e}",
                recovery_hint="Check file permissions and disk space. A .bak copy may be available.",
            ) from e
        finally:
            if temp_path.exists():
                temp_path.unlink()

        logger.debug(f"Saved {type(model).__name__} to {path}")

    @staticmethod
    def load_json_or_default(path: Path, model_type: type[T]) -> T:
        """Load `path`, or return defaults without writing if it is missing. Errors in an existing file propagate."""
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"{path} not found, using default {model_type.__name__}")
            return model_type()

    @staticmethod
    def ensure_valid_or_create(path: Path, model_type: type[T]) -> T:
        """
        Load `path`, writing defaults there if it is missing.

        A file that fails to load is left untouched and defaults are returned.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            instance = model_type()
            PydanticPersistence.save_json(instance, path)
            logger.info(f"Created default {model_type.__name__} at {path}")
            return instance
        except ConfigurationError as e:
            logger.error(f"Failed to load {path}: {e.technical_message}")
            logger.warning(f"Using default {model_type.__name__}; {path} was NOT overwritten")
            return model_type()
