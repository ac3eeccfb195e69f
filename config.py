"""Central configuration for tag image preprocessing.

All tunable parameters are defined here with descriptive names.
The CLI exposes the most useful ones; the rest are fixed for a run.
"""

# =============================================================================
# TAG GEOMETRY
# =============================================================================

# Width/height of a tag sample in pixels. Used for border sizing and as the
# CLAHE tile grid. Must be even so the border splits evenly on both sides.
TAG_WIDTH = 64
TAG_HEIGHT = 64

# =============================================================================
# BORDER
# =============================================================================

# Pad images with a replicated border of half a tag on every side
BORDER_ENABLED = True

# =============================================================================
# LOCAL HISTOGRAM EQUALIZATION (CLAHE)
# =============================================================================

CLAHE_ENABLED = False

# Contrast limit for CLAHE. Higher values amplify noise in flat regions.
CLAHE_CLIP_LIMIT = 2.0

# =============================================================================
# ADAPTIVE THRESHOLDING
# =============================================================================

THRESHOLD_ENABLED = False

# Keep the hard binary mask instead of blending it with the original
BINARY_IMAGE = False

# Gaussian neighbourhood size for the local threshold (odd, > 1)
THRESHOLD_BLOCK_SIZE = 51

# Constant subtracted from the weighted neighbourhood mean
THRESHOLD_OFFSET = 0.0

# Value assigned to pixels above the local threshold
THRESHOLD_MAX_VALUE = 255

# Blend weights for the softened (non-binary) threshold output
BLEND_WEIGHT_ORIGINAL = 0.7
BLEND_WEIGHT_THRESHOLD = 0.3

# =============================================================================
# OUTPUT
# =============================================================================

# Inserted before the file extension: name.png -> name_wb.png
OUTPUT_SUFFIX = "_wb"

# Manifest written into the output directory unless --output-pathfile is given
DEFAULT_MANIFEST_NAME = "images.txt"
