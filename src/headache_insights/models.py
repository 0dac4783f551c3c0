"""Record and result types for the headache insights engine."""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime

LOCATIONS = ("Frontal", "Temporal", "Occipital", "Diffuse", "One-sided")
QUALITIES = ("Throbbing", "Pressure", "Sharp", "Dull", "Aura")


def to_local_naive(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def _unique(tags, name: str) -> tuple[str, ...]:
    """Drop duplicate tags, keeping the first occurrence."""
    if tags is None:
        return ()
    if not isinstance(tags, (list, tuple)):
        raise ValueError(f"{name} must be a list of tags, got {type(tags).__name__}")
    return tuple(dict.fromkeys(tags))


@dataclass(frozen=True)
class HeadacheEpisode:
    """A single logged headache.

    Immutable once created. Tag collections behave as sets but keep the order
    they were logged in.
    """

    id: str
    start_time: datetime
    duration_min: int = 0
    intensity: int = 0
    location: tuple[str, ...] = ()
    quality: tuple[str, ...] = ()
    triggers: tuple[str, ...] = ()
    used_device: bool = False

    # Device session (only meaningful when used_device is set)
    device_mode: str | None = None
    device_duration: int | None = None  # minutes
    device_temp: float | None = None  # celsius
    device_pressure: int | None = None  # 0-10
    device_pattern: str | None = None
    device_effectiveness: int | None = None  # 1-10 rating
    device_notes: str | None = None

    barometric_pressure: float | None = None  # hPa at logging time
    notes: str | None = None

    def __post_init__(self):
        """Validate ranges and normalize tag collections."""
        if not self.id:
            raise ValueError("Episode id cannot be empty")
        if self.duration_min < 0:
            raise ValueError(f"duration_min must be >= 0, got {self.duration_min}")
        if not (0 <= self.intensity <= 10):
            raise ValueError(f"intensity must be 0-10, got {self.intensity}")
        if self.device_effectiveness is not None and not (1 <= self.device_effectiveness <= 10):
            raise ValueError(
                f"device_effectiveness must be 1-10, got {self.device_effectiveness}"
            )
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "start_time", to_local_naive(self.start_time))
        object.__setattr__(self, "location", _unique(self.location, "location"))
        object.__setattr__(self, "quality", _unique(self.quality, "quality"))
        object.__setattr__(self, "triggers", _unique(self.triggers, "triggers"))


@dataclass(frozen=True)
class HabitLog:
    """Once-per-day record of diet, sleep, stress, exercise and environment."""

    date: date

    # Diet
    sugar: str = "None"  # None / Low / Medium / High
    starch: bool = False
    dairy: bool = False
    caffeine: str = "None"  # None / 1 / 2 / 3+
    hydration: str = "OK"  # Poor / OK / Good
    skipped_meals: bool = False

    # Sleep
    sleep_duration: float = 0.0  # hours
    sleep_quality: str = "Fair"  # Poor / Fair / Good

    stress: int = 0  # 0-10

    # Exercise
    exercise: bool = False
    exercise_intensity: str | None = None  # Low / Med / High

    # Environment
    barometric_pressure: float | None = None
    weather: tuple[str, ...] = ()  # Dry / Humid / Rain / Windy

    # Menstruation
    menstruation: bool = False
    menstruation_phase: str | None = None  # Off / Pre / On / Post

    notes: str | None = None

    def __post_init__(self):
        if not (0 <= self.stress <= 10):
            raise ValueError(f"stress must be 0-10, got {self.stress}")
        if self.sleep_duration < 0:
            raise ValueError(f"sleep_duration must be >= 0, got {self.sleep_duration}")
        object.__setattr__(self, "weather", _unique(self.weather, "weather"))


@dataclass
class DaySummary:
    """Episode statistics for one calendar day."""

    day: int  # 1-based position in the window
    date: date
    episode_count: int = 0
    avg_intensity: float = 0.0
    avg_device_effectiveness: float = 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data


@dataclass
class TriggerStat:
    """How strongly one trigger is associated with episodes."""

    trigger: str
    frequency: int
    baseline: float  # episodes per day, all triggers
    probability: float  # episodes per day with this trigger
    lift: int  # percent vs baseline
    percentage: int
    avg_intensity: float
    correlation_score: int  # 0-100

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Pattern:
    """A heuristically detected recurring relationship."""

    type: str  # 'time', 'trigger', 'weather', 'habit'
    title: str
    description: str
    confidence: str  # 'high', 'medium', 'low'
    actionable: str
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class RiskAssessment:
    """Short-horizon (24-48h) headache risk forecast."""

    risk: str  # 'high', 'medium', 'low'
    probability: int
    factors: list[str] = field(default_factory=list)
    recommendation: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class InsightReport:
    """Combined output of every analysis pass over one snapshot."""

    generated_at: datetime
    window_days: int
    weekly: list[DaySummary] = field(default_factory=list)
    monthly: list[DaySummary] = field(default_factory=list)
    triggers: list[TriggerStat] = field(default_factory=list)
    patterns: list[Pattern] = field(default_factory=list)
    trend: str = "stable"
    prediction: RiskAssessment | None = None
    overview: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "generated_at": self.generated_at.isoformat(),
            "window_days": self.window_days,
            "weekly": [d.to_dict() for d in self.weekly],
            "monthly": [d.to_dict() for d in self.monthly],
            "triggers": [t.to_dict() for t in self.triggers],
            "patterns": [p.to_dict() for p in self.patterns],
            "trend": self.trend,
            "prediction": self.prediction.to_dict() if self.prediction else None,
            "overview": self.overview,
        }
