"""
Basic width reduction example.

Shows the energy map, the first groove and the narrowed result side by side.
Pass an image path to carve your own picture, otherwise a synthetic scene is
generated.

    python examples/basic_slimming.py [image] [k]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from slimming import PixelGrid, energy_map, find_seams, load_image, save_image

OUTPUT_DIR = os.path.join(os.path.dirname(__file__), '..', 'output')


def synthetic_scene(H=120, W=200):
    """Sky, ground and two boxes; the flat sky and ground are cheap to carve."""
    img = np.zeros((H, W, 3), dtype=np.uint8)
    img[:H // 2] = (135, 180, 235)
    img[H // 2:] = (90, 140, 60)
    img[40:100, 30:60] = (200, 40, 40)
    img[50:100, 140:175] = (240, 210, 60)
    rng = np.random.default_rng(0)
    noise = rng.integers(-6, 7, size=img.shape)
    return np.clip(img.astype(np.int64) + noise, 0, 255).astype(np.uint8)


def draw_seam(image: PixelGrid, columns) -> np.ndarray:
    """Copy of the image with one groove painted red."""
    img_vis = image.to_array()
    for i, col in enumerate(columns):
        img_vis[i, col] = (255, 0, 0)
    return img_vis


def main():
    if len(sys.argv) > 1:
        print(f"Loading {sys.argv[1]}...")
        image = load_image(sys.argv[1])
    else:
        print("Generating synthetic scene...")
        image = PixelGrid.from_array(synthetic_scene())
    k = max(int(sys.argv[2]) if len(sys.argv) > 2 else image.width // 3, 1)
    print(f"Image size: {image.width} x {image.height}, removing {k} columns")

    carved, seams = find_seams(image, k)
    print(f"First groove cost: {seams[0].cost:.1f}, last: {seams[-1].cost:.1f}")

    os.makedirs(OUTPUT_DIR, exist_ok=True)
    save_image(carved, os.path.join(OUTPUT_DIR, 'slimmed.png'))

    fig, axes = plt.subplots(1, 3, figsize=(15, 4))
    axes[0].imshow(energy_map(image).numpy(), cmap='magma')
    axes[0].set_title('Energy')
    axes[1].imshow(draw_seam(image, seams[0].columns.tolist()))
    axes[1].set_title('First groove')
    axes[2].imshow(carved.to_array())
    axes[2].set_title(f'Width {carved.width}')
    for ax in axes:
        ax.axis('off')
    plt.tight_layout()

    path = os.path.join(OUTPUT_DIR, 'slimming_overview.png')
    plt.savefig(path, dpi=100)
    print(f"Saved: {path}")


if __name__ == '__main__':
    main()
