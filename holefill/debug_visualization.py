"""Debug visualization for hole filling stages."""
from pathlib import Path

import numpy as np
from PIL import Image
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
from matplotlib import pyplot as plt
from skimage.segmentation import mark_boundaries

from holefill.raster_io import to_uint8
from holefill.types import HOLE_VALUE, LayerMap, Segmentation


def save_stage_image(image: np.ndarray, output_path: Path):
    """Save a float image with holes shown black."""
    Image.fromarray(to_uint8(image)).save(output_path)


def visualize_segmentation(
    masked: np.ndarray,
    segmentation: Segmentation,
    output_path: Path
):
    """
    Outline the hole in red and mark boundary pixels in green.
    """
    gray = to_uint8(masked).astype(np.float64) / 255.0
    hole_mask = segmentation.hole_mask(masked.shape)

    viz = mark_boundaries(gray, hole_mask.astype(np.int32), color=(1, 0, 0), mode='inner')
    for pixel in segmentation.boundary:
        viz[pixel] = (0, 1, 0)

    Image.fromarray((viz * 255).astype(np.uint8)).save(output_path)


def visualize_depth_map(layer_map: LayerMap, output_path: Path):
    """
    Show hole pixel depths with a colour scale; other pixels are blank.
    """
    depth = np.ma.masked_less_equal(layer_map.depth, 0)

    fig, ax = plt.subplots(figsize=(8, 8))
    im = ax.imshow(depth, cmap='viridis', interpolation='nearest')
    ax.set_title(f'Hole depth ({layer_map.max_depth} layers)')
    ax.axis('off')
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    plt.tight_layout()
    plt.savefig(output_path, dpi=100, bbox_inches='tight')
    plt.close(fig)


def visualize_comparison(
    masked: np.ndarray,
    filled: np.ndarray,
    output_path: Path,
    hole_value: float = HOLE_VALUE
):
    """
    Side by side view of the masked input and the filled result.
    """
    fig, axes = plt.subplots(1, 2, figsize=(12, 6))

    axes[0].imshow(np.ma.masked_equal(masked, hole_value), cmap='gray', vmin=0, vmax=255)
    axes[0].set_title('Masked')
    axes[0].axis('off')

    axes[1].imshow(filled, cmap='gray', vmin=0, vmax=255)
    axes[1].set_title('Filled')
    axes[1].axis('off')

    plt.tight_layout()
    plt.savefig(output_path, dpi=100, bbox_inches='tight')
    plt.close(fig)
