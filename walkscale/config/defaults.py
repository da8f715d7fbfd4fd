"""Default parameters offered by the interactive prompt."""

from walkscale.config.experiment import WalkExperimentParams

# Simple walk on the square grid, 100 arithmetic buckets 20, 25, 30, ...
# with sqrt(steps) * 20 walks per bucket.
DEFAULT_PARAMS = WalkExperimentParams()
