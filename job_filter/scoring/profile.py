"""Profile and job loading and validation utilities."""

from __future__ import annotations

from pathlib import Path

from job_filter.scoring.config import ScoringConfig, get_scoring_config
from job_filter.scoring.models import Job, Profile
from job_filter.utils.files import load_structured_file


class ProfileService:
    """Service for loading and validating scoring inputs."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()

    def load_profile(self, path: Path | str | None = None) -> Profile:
        """Load and validate a profile from YAML or JSON."""
        profile_path = Path(path) if path is not None else self.config.profile_path
        if not profile_path.exists():
            raise FileNotFoundError(f"Profile not found: {profile_path}")

        data = self._load_mapping(profile_path, kind="Profile")
        return Profile.model_validate(data)

    def load_job(self, path: Path | str) -> Job:
        """Load and validate a job posting from YAML or JSON."""
        job_path = Path(path)
        if not job_path.exists():
            raise FileNotFoundError(f"Job not found: {job_path}")

        data = self._load_mapping(job_path, kind="Job")
        return Job.model_validate(data)

    def validate_profile(self, profile: Profile) -> list[str]:
        """Return warnings for incomplete profiles."""
        warnings: list[str] = []

        if not profile.target_roles:
            warnings.append("Target roles list is empty")
        if not profile.comp_floor and not profile.hard_filters.min_base_salary:
            warnings.append("Compensation floor is not set")
        if profile.comp_target and profile.comp_target < profile.comp_floor:
            warnings.append("Compensation target is below the compensation floor")

        return warnings

    def _load_mapping(self, path: Path, *, kind: str) -> dict:
        data = load_structured_file(path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"{kind} must be a mapping/dict: {path}")
        return data
