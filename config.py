"""Central configuration for scope correction analysis.

All tunable parameters are defined here with descriptive names.
These values are the process-wide defaults; callers override them per
request through `analysis.AnalysisConfig.with_overrides()`.
"""

# =============================================================================
# IMAGE PREPROCESSING
# =============================================================================

# Longest edge of the working image after downsampling (bounds CPU per request)
MAX_W = 1200

# Minimum allowed working edge (too small loses bullet holes)
MIN_WORKING_EDGE = 128

# Maximum allowed working edge (too large makes labeling slow)
MAX_WORKING_EDGE = 4096

# =============================================================================
# SHOOTING SETUP
# =============================================================================

# Distance from muzzle to target
DISTANCE_YARDS = 100.0

# Scope adjustment per click, in MOA
MOA_PER_CLICK = 0.25

# Physical width of the target, mapped onto the analysis region width
TARGET_WIDTH_IN = 23.0

# Physical height of the target; None means "same scale as the width"
TARGET_HEIGHT_IN = None

# One MOA subtends this many inches at 100 yards
INCHES_PER_MOA_AT_100_YARDS = 1.047

# =============================================================================
# REGION LOCATION
# =============================================================================

# Pixels darker than this are "ink" (printed target against a light backdrop)
NOT_WHITE_THRESHOLD = 235

# Padding around the ink bounding box (fraction of its width/height)
INK_PAD_PCT = 0.02

# =============================================================================
# TARGET PLAUSIBILITY
# =============================================================================

# The analysis region must cover at least this fraction of the photo
MIN_BBOX_AREA_FRAC = 0.20

# Aspect ratio window (width/height) for the ink bounding box
BBOX_ASPECT_MIN = 0.6
BBOX_ASPECT_MAX = 1.6

# Paper background: at least PAPER_WHITE_FRAC_MIN of the region >= PAPER_WHITE_THRESH
PAPER_WHITE_THRESH = 200
PAPER_WHITE_FRAC_MIN = 0.35

# Clutter guard: at most DARK_FRAC_MAX of the region <= DARK_THRESH
DARK_THRESH = 60
DARK_FRAC_MAX = 0.35

# =============================================================================
# BINARIZATION
# =============================================================================

# Otsu threshold is clamped into this range for near-uniform regions
OTSU_CLAMP_MIN = 50
OTSU_CLAMP_MAX = 180

# =============================================================================
# CANDIDATE FILTERING
# =============================================================================

# Hole area band as a fraction of the region area. The minimum rounds to a
# single pixel up to a MAX_W x MAX_W region, so lone specks still count
# toward the TOO_NOISY limit.
MIN_AREA_PCT = 0.0000003
MAX_AREA_PCT = 0.01

# Holes are compact: max(w/h, h/w) above this is a line, not a hole
MAX_ASPECT = 2.5

# Minimum area / bbox area (a disc fills ~0.785)
MIN_FILL = 0.4

# Components touching this margin of the region are border artifacts
EDGE_MARGIN_PCT = 0.01
EDGE_MARGIN_MIN_PX = 10

# More candidates than this means texture or clutter, not a shot group
MAX_CANDIDATES = 40

# =============================================================================
# SHOT GROUP AND CORRECTION
# =============================================================================

# Shots used to form the group
MIN_SHOTS = 3
MAX_SHOTS = 10

# Corrections larger than this (either axis) are treated as bad detections
MAX_ABS_CLICKS = 40.0

# Decimal places kept in reported clicks
CLICK_DECIMALS = 2

# =============================================================================
# BATCH ANALYSIS
# =============================================================================

# Image extensions picked up when scanning a directory
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff", ".webp")

# Wall-clock limit per image in batch mode (seconds, None = no limit)
BATCH_TIMEOUT_SECONDS = 60.0
