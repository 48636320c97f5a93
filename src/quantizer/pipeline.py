import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .params import PipelineParams
from .processing.clustering import quantize
from .processing.colors import Color, as_rgb_grid, extract_colors
from .processing.mst import MSTResult, kruskal

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    rgb: np.ndarray
    colors: Tuple[Color, ...]
    mst: MSTResult
    total_weight: float
    labels: List[int]
    palette: np.ndarray
    quantized: np.ndarray


def run_pipeline(rgb_in: np.ndarray, p: PipelineParams) -> PipelineResult:
    rgb = as_rgb_grid(rgb_in)

    if p.quantize.k > 0:
        q = quantize(rgb, p.quantize.k, p.quantize.representative)
        colors, mst = q.colors, q.mst
        labels, palette, quantized = q.labels, q.palette, q.image
    else:
        colors = extract_colors(rgb)
        mst = kruskal(colors)
        labels = list(range(len(colors)))
        palette = np.array(colors, dtype=np.uint8).reshape(-1, 3)
        quantized = rgb.copy()

    logger.info(
        f"{len(colors)} distinct colors, MST of {len(mst.edges)} edges, "
        f"weight {mst.total_weight:.4f}"
    )
    return PipelineResult(
        rgb=rgb,
        colors=colors,
        mst=mst,
        total_weight=mst.total_weight,
        labels=labels,
        palette=palette,
        quantized=quantized,
    )
