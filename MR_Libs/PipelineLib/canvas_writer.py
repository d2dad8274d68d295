"""
Canvas writer for Minecraft Render.

Saves the canvases of a render to disk, each under the file name of its
canvas spec. Writing is all-or-nothing: every canvas is first saved to a
temporary sibling file, and the temporaries are renamed into place only once
all of them were written. Existing outputs are moved aside while the new ones
are renamed in, so a failed rename restores them. On failure the temporaries
are removed and no output file is left changed.

Classes:
    CanvasWriterConfig: Configuration for canvas writing
    CanvasWriter: Resolves output paths and writes canvas sets
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import logging
import os

from MR_Libs.constants import BACKUP_FILE_SUFFIX, DEFAULT_OUTPUT_FORMAT, TEMP_FILE_SUFFIX

logger = logging.getLogger(__name__)


@dataclass
class CanvasWriterConfig:
    """Configuration for canvas writing.

    Attributes:
        output_dir: Directory the canvases are written to (default: working directory)
        save_format: Image format to save as (default: PNG)
        create_directories: Create output_dir if it doesn't exist (default: True)
        overwrite: Overwrite existing files (default: True)
    """
    output_dir: str = "."
    save_format: str = DEFAULT_OUTPUT_FORMAT
    create_directories: bool = True
    overwrite: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CanvasWriterConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        if "output_dir" in filtered:
            filtered["output_dir"] = str(filtered["output_dir"])
        return cls(**filtered)

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs."""
        return {"format": self.save_format.upper()}


class CanvasWriter:
    """Writes canvas sets and single images under a fixed output directory."""

    def __init__(self, config: CanvasWriterConfig):
        self.config = config
        self.output_dir = Path(config.output_dir)

    def resolve_path(self, file_name: str) -> Path:
        """
        Resolve a canvas file name inside the output directory.

        Raises:
            ValueError: If the name is empty, contains '..' or any directory part
        """
        if not file_name or file_name in (".", ".."):
            raise ValueError(f"Invalid output file name: '{file_name}'")

        if ".." in Path(file_name).parts:
            raise ValueError(
                f"Path traversal detected: output file name contains '..': {file_name}"
            )

        if Path(file_name).name != file_name or "\\" in file_name:
            raise ValueError(f"Output file name must not contain directories: {file_name}")

        return self.output_dir / file_name

    def save_all(self, canvas_set: Any) -> Dict[str, Path]:
        """
        Save every canvas of a canvas set.

        Args:
            canvas_set: OutputCanvasSet to persist

        Returns:
            Dictionary mapping canvas identifier -> written path

        Raises:
            ValueError: If file names are invalid or two canvases share a file name
            FileExistsError: If a target exists and overwrite=False
            OSError: If any file cannot be written (nothing is left behind)
        """
        targets: List[Tuple[str, Any, Path]] = []
        seen: Dict[Path, str] = {}
        for identifier, image in canvas_set.items():
            path = self.resolve_path(canvas_set.spec(identifier).file_name)
            if path in seen:
                raise ValueError(
                    f"Canvases '{seen[path]}' and '{identifier}' both write {path.name}"
                )
            seen[path] = identifier
            targets.append((identifier, image, path))

        written = self._write_atomically([(image, path) for _, image, path in targets])
        logger.info(f"Wrote {len(written)} canvases to {self.output_dir}")
        return {identifier: path for identifier, _, path in targets}

    def save_image(self, image: Any, file_name: str) -> Path:
        """Save one image under the output directory, with the same guarantees as save_all."""
        path = self.resolve_path(file_name)
        self._write_atomically([(image, path)])
        return path

    def _write_atomically(self, targets: List[Tuple[Any, Path]]) -> List[Path]:
        if not self.config.overwrite:
            existing = [str(path) for _, path in targets if path.exists()]
            if existing:
                raise FileExistsError(
                    f"Output file(s) already exist: {', '.join(existing)}. "
                    f"Set overwrite=True to replace."
                )

        if self.config.create_directories:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        elif not self.output_dir.is_dir():
            raise OSError(f"Output directory does not exist: {self.output_dir}")

        kwargs = self.config.get_save_kwargs()
        temporaries: List[Tuple[Path, Path]] = []
        try:
            for image, path in targets:
                if not hasattr(image, "save"):
                    raise TypeError(f"Expected PIL Image, got {type(image)}")
                temp_path = path.with_name(path.name + TEMP_FILE_SUFFIX)
                temporaries.append((temp_path, path))
                image.save(temp_path, **kwargs)
        except Exception as e:
            self._remove_temporaries([temp for temp, _ in temporaries])
            raise OSError(f"Failed to write {path}: {str(e)}") from e

        committed: List[Tuple[Path, Optional[Path]]] = []
        try:
            for temp_path, path in temporaries:
                backup = None
                if path.exists():
                    backup = path.with_name(path.name + BACKUP_FILE_SUFFIX)
                    os.replace(path, backup)
                try:
                    os.replace(temp_path, path)
                except OSError:
                    if backup is not None:
                        os.replace(backup, path)
                    raise
                committed.append((path, backup))
        except OSError as e:
            self._roll_back(committed)
            self._remove_temporaries([temp for temp, _ in temporaries])
            raise OSError(f"Failed to move outputs into {self.output_dir}: {str(e)}") from e

        for path, backup in committed:
            if backup is not None:
                backup.unlink()
            logger.debug(f"Wrote {path}")

        return [path for path, _ in committed]

    def _roll_back(self, committed: List[Tuple[Path, Optional[Path]]]) -> None:
        """Restore the previous files of already moved outputs, newest first."""
        for path, backup in reversed(committed):
            try:
                if backup is not None:
                    os.replace(backup, path)
                else:
                    path.unlink()
            except OSError as e:
                logger.error(f"Failed to roll back {path}: {e}")

    def _remove_temporaries(self, paths: List[Path]) -> None:
        for path in paths:
            try:
                path.unlink()
            except FileNotFoundError:
                continue
