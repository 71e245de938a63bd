from dataclasses import dataclass


@dataclass(frozen=True)
class PipelineConfig:
    """
    Tunable parameters for one pipeline run.
    Defaults reproduce the Reef Check Caribbean hard-coral dataset.
    """
    target_code: str = "HC"            # substrate code counted as cover
    points_per_segment: int = 40       # points recorded per 20 m segment
    coral_decimals: int = 2
    depth_decimals: int = 2
    date_delimiter: str = "-"          # month-day-yy on input
    century_prefix: str = "20"         # surveys are all 2000-2099
    region: str = "caribbean"
    method: str = "line_transect"
    data_source: str = "reef_check"
    apply_hemisphere_sign: bool = True  # negate S latitudes and W longitudes

    def __post_init__(self):
        if self.points_per_segment <= 0:
            raise ValueError(f"points_per_segment must be positive, got {self.points_per_segment}")
        if not self.date_delimiter:
            raise ValueError("date_delimiter must be a non-empty string")
