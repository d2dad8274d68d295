"""
Render pipeline for Minecraft Render.

One forward pass per skin:

    load skin -> tone correction -> layout remap -> reference alpha masks -> write canvases

Every check (image format, skin size, layout table, reference sizes) runs
before the first file is written, and the canvas writer itself is
all-or-nothing, so a failed run leaves no output behind.

Classes:
    PipelineConfig: Options for a render run
    RenderResult: Skin record, canvases and written paths of one render

Functions:
    correct_skin: Apply the configured tone correction to a skin
    run_pipeline: Build the canvases for an in-memory skin (no writes)
    apply_reference_masks: Mask canvases with in-game reference portraits
    render_skin_file: Load, render and write one skin file
    precorrect_skin_file: Write only the tone corrected skin
    render_skin_batch: Render several skin files, optionally in parallel
"""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import concurrent.futures
import logging

from MR_Libs.constants import PRECORRECTED_SUFFIX
from MR_Libs.errors import BatchRenderError
from MR_Libs.ImageEditingLib.image_editing_ops import apply_reference_alpha, ensure_rgba
from MR_Libs.ImageEditingLib.image_models import SkinRecord
from MR_Libs.ImageEditingLib.tone_corrector import ToneCorrector, ToneCurveParameters
from MR_Libs.LayoutLib.layout_models import SkinLayout
from MR_Libs.LayoutLib.layout_remapper import LayoutRemapper, OutputCanvasSet
from MR_Libs.LayoutLib.layout_store import layout_from_document, layout_to_document, load_layout
from MR_Libs.LayoutLib.skin_layout import DEFAULT_SKIN_LAYOUT
from MR_Libs.PipelineLib.canvas_writer import CanvasWriter, CanvasWriterConfig
from MR_Libs.PipelineLib.skin_loader import load_skin
from MR_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Options for a render run.

    Attributes:
        layout: Layout table to remap with (default: the 64x64 Java layout)
        tone_correct: Apply the tone curve before remapping (default: True)
        tone_parameters: Tone curve constants
        reference_dir: Directory of in-game reference portraits whose alpha
                       masks the matching canvases (None = no masking)
        writer: Canvas writer configuration
    """
    layout: SkinLayout = DEFAULT_SKIN_LAYOUT
    tone_correct: bool = True
    tone_parameters: ToneCurveParameters = ToneCurveParameters()
    reference_dir: Optional[str] = None
    writer: CanvasWriterConfig = field(default_factory=CanvasWriterConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (the layout is embedded as a layout document)."""
        return {
            "layout": layout_to_document(self.layout),
            "tone_correct": self.tone_correct,
            "tone_parameters": self.tone_parameters.to_dict(),
            "reference_dir": self.reference_dir,
            "writer": self.writer.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """
        Create from dictionary.

        Recognized keys: layout (an embedded layout document, as written by
        to_dict), layout_path (a layout JSON file, used when layout is absent),
        tone_correct, tone_parameters, reference_dir, writer. Unknown keys are
        ignored.
        """
        config = cls()
        if isinstance(data.get("layout"), dict):
            config.layout = layout_from_document(data["layout"])
        elif data.get("layout_path"):
            config.layout = load_layout(Path(data["layout_path"]))
        if "tone_correct" in data:
            config.tone_correct = bool(data["tone_correct"])
        if isinstance(data.get("tone_parameters"), dict):
            config.tone_parameters = ToneCurveParameters.from_dict(data["tone_parameters"])
        if data.get("reference_dir"):
            config.reference_dir = str(data["reference_dir"])
        if isinstance(data.get("writer"), dict):
            config.writer = CanvasWriterConfig.from_dict(data["writer"])
        return config


@dataclass
class RenderResult:
    skin: SkinRecord
    canvases: OutputCanvasSet
    written: Dict[str, Path]


def correct_skin(image: Any, config: PipelineConfig) -> Any:
    """Return the skin the remapper reads: tone corrected, or an RGBA copy."""
    if config.tone_correct:
        return ToneCorrector(config.tone_parameters).correct(image)
    return ensure_rgba(image)


def apply_reference_masks(
    canvas_set: OutputCanvasSet,
    layout: SkinLayout,
    reference_dir: Path,
) -> List[str]:
    """
    Copy the alpha of each canvas's reference portrait onto the canvas.

    Canvases without a reference_file are left as they are. A missing
    reference file is skipped with a warning.

    Returns:
        Identifiers of the masked canvases

    Raises:
        DimensionMismatch: If a reference image differs in size from its canvas
        OSError: If a reference image cannot be read
    """
    masked: List[str] = []
    for spec in layout.canvases:
        if not spec.reference_file:
            continue

        reference_path = Path(reference_dir) / spec.reference_file
        if not reference_path.is_file():
            logger.warning(f"Reference image not found, '{spec.identifier}' left unmasked: {reference_path}")
            continue

        try:
            with Image.open(reference_path) as reference:
                reference_rgba = reference.convert("RGBA")
        except OSError as e:
            raise OSError(f"Failed to load reference image {reference_path}: {str(e)}") from e

        canvas_set.replace(
            spec.identifier,
            apply_reference_alpha(canvas_set[spec.identifier], reference_rgba),
        )
        masked.append(spec.identifier)
        logger.debug(f"Masked canvas '{spec.identifier}' with {reference_path}")

    return masked


def run_pipeline(image: Any, config: Optional[PipelineConfig] = None) -> OutputCanvasSet:
    """
    Build every output canvas for an in-memory skin.

    Args:
        image: PIL Image of the skin
        config: Pipeline options (default: PipelineConfig())

    Returns:
        OutputCanvasSet ready to be written

    Raises:
        SkinRenderError: For invalid images or layouts
        OSError: If a reference image cannot be read
    """
    config = config or PipelineConfig()
    return _build_canvases(correct_skin(image, config), config)


def _build_canvases(corrected: Any, config: PipelineConfig) -> OutputCanvasSet:
    canvases = LayoutRemapper(config.layout).remap(corrected)
    if config.reference_dir:
        apply_reference_masks(canvases, config.layout, Path(config.reference_dir))
    return canvases


def render_skin_file(skin_path: Path, config: Optional[PipelineConfig] = None) -> RenderResult:
    """
    Load a skin file, render it and write all canvases.

    Args:
        skin_path: Path to the skin image
        config: Pipeline options (default: PipelineConfig())

    Returns:
        RenderResult with the skin record, the canvases and the written paths

    Raises:
        FileNotFoundError, OSError: For unreadable inputs or unwritable outputs
        SkinRenderError: For invalid images or layouts
    """
    config = config or PipelineConfig()
    skin_path = Path(skin_path)

    original = load_skin(skin_path)
    corrected = correct_skin(original, config)
    canvases = _build_canvases(corrected, config)

    written = CanvasWriter(config.writer).save_all(canvases)
    logger.info(f"Rendered {skin_path} into {len(written)} files")

    return RenderResult(
        skin=SkinRecord(path=skin_path, original=original, corrected=corrected),
        canvases=canvases,
        written=written,
    )


def precorrect_skin_file(
    skin_path: Path,
    output_path: Optional[Path] = None,
    parameters: ToneCurveParameters = ToneCurveParameters(),
    overwrite: bool = True,
) -> Path:
    """
    Write the tone corrected skin without remapping it.

    Args:
        skin_path: Path to the skin image
        output_path: Destination (default: '<stem>_corrected.png' next to the skin)
        parameters: Tone curve constants
        overwrite: Replace an existing output file

    Returns:
        The written path
    """
    skin_path = Path(skin_path)
    if output_path is None:
        output_path = skin_path.with_name(f"{skin_path.stem}{PRECORRECTED_SUFFIX}.png")
    output_path = Path(output_path)

    corrected = ToneCorrector(parameters).correct(load_skin(skin_path))
    writer = CanvasWriter(
        CanvasWriterConfig(output_dir=str(output_path.parent), overwrite=overwrite)
    )
    written = writer.save_image(corrected, output_path.name)
    logger.info(f"Wrote tone corrected skin {written}")
    return written


def render_skin_batch(
    skin_paths: Sequence[Path],
    config: Optional[PipelineConfig] = None,
    use_threading: bool = True,
    max_workers: Optional[int] = None,
) -> Dict[Path, RenderResult]:
    """
    Render several skins, each into '<output_dir>/<skin stem>/'.

    Skins are independent; with use_threading they render in a thread pool.
    A failing skin does not stop the others.

    Args:
        skin_paths: Skin files to render
        config: Pipeline options shared by every skin
        use_threading: Render skins in parallel (default: True)
        max_workers: Maximum number of threads (default: None = executor default)

    Returns:
        Dictionary mapping skin path -> RenderResult

    Raises:
        ValueError: If two skins share a file stem
        BatchRenderError: If one or more skins failed (after all skins ran)
    """
    config = config or PipelineConfig()
    paths = [Path(path) for path in skin_paths]

    stems: Dict[str, Path] = {}
    for path in paths:
        if path.stem in stems:
            raise ValueError(f"Skins {stems[path.stem]} and {path} would write the same directory")
        stems[path.stem] = path

    base_dir = Path(config.writer.output_dir)
    skin_configs = {
        path: replace(config, writer=replace(config.writer, output_dir=str(base_dir / path.stem)))
        for path in paths
    }

    results: Dict[Path, RenderResult] = {}
    failures: Dict[Path, Exception] = {}

    if use_threading and len(paths) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures: Dict[concurrent.futures.Future, Path] = {
                executor.submit(render_skin_file, path, skin_configs[path]): path
                for path in paths
            }
            for future in concurrent.futures.as_completed(futures):
                path = futures[future]
                try:
                    results[path] = future.result()
                except (OSError, ValueError) as e:
                    logger.error(f"Failed to render {path}: {e}")
                    failures[path] = e
    else:
        for path in paths:
            try:
                results[path] = render_skin_file(path, skin_configs[path])
            except (OSError, ValueError) as e:
                logger.error(f"Failed to render {path}: {e}")
                failures[path] = e

    if failures:
        raise BatchRenderError(failures)

    logger.info(f"Rendered {len(results)} skins into {base_dir}")
    return {path: results[path] for path in paths}
