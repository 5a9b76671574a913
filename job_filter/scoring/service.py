"""Fit scoring service implementation."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from datetime import date

from job_filter.ledger.models import Claim, ExperienceBundle
from job_filter.ledger.service import build_experience_bundles, get_auto_usable_claims
from job_filter.requirements import experience_subject, extract_requirements
from job_filter.requirements.models import GapSeverity, Requirement
from job_filter.requirements.patterns import TOOL_VOCABULARY, canonical_tool, find_tools
from job_filter.scoring.bands import fit_label, round_half_up
from job_filter.scoring.benefits import (
    benefit_label,
    count_benefit_signals,
    job_mentions_benefit,
)
from job_filter.scoring.compensation import CompRange, parse_comp_from_text
from job_filter.scoring.config import ScoringConfig, get_scoring_config
from job_filter.scoring.matchers import (
    contains_phrase,
    keyword_overlap,
    keywords,
    related_tools,
    tools_match,
)
from job_filter.scoring.models import (
    ConstraintResult,
    HardFilters,
    Job,
    MustHaveSummary,
    Profile,
    ScoreBreakdown,
    ScoreResult,
)

logger = logging.getLogger(__name__)

PAID_MEDIA_KEYWORDS: tuple[str, ...] = (
    "paid media manager",
    "paid social manager",
    "ppc manager",
    "performance marketing manager",
    "paid acquisition manager",
    "sem manager",
    "paid search manager",
    "media buyer",
)

SEED_STAGE_KEYWORDS: tuple[str, ...] = (
    "seed stage",
    "seed-stage",
    "pre-seed",
    "seed funded",
    "seed-funded",
    "seed round",
    "angel funded",
    "bootstrapped startup",
)

SENIOR_TITLES: tuple[str, ...] = (
    "vp",
    "vice president",
    "head of",
    "director",
    "chief",
    "svp",
    "senior vice president",
)

STRATEGY_SIGNALS: tuple[str, ...] = (
    "strategy",
    "strategic",
    "roadmap",
    "vision",
    "build the team",
    "lead the team",
    "cross-functional",
    "p&l",
    "budget ownership",
)

TEAM_SIGNALS: tuple[str, ...] = (
    "manage a team",
    "direct reports",
    "build a team",
    "lead a team",
)

STAGE_SIGNALS: dict[str, int] = {
    "series a": 10,
    "series b": 15,
    "series c": 18,
    "series d": 19,
    "public": 18,
    "ipo": 18,
    "profitable": 17,
    "fortune 500": 20,
    "enterprise": 14,
}
DEFAULT_STAGE_SCORE = 8

DOMAIN_SIGNALS: tuple[str, ...] = (
    "growth",
    "lifecycle",
    "gtm",
    "go-to-market",
    "revenue",
    "demand gen",
    "acquisition",
    "retention",
    "conversion",
    "funnel",
    "marketing ops",
    "ecommerce",
    "e-commerce",
    "b2c",
    "dtc",
    "direct-to-consumer",
    "martech",
    "analytics",
    "attribution",
    "experimentation",
)
DOMAIN_POINTS_PER_SIGNAL = 2.5

# (phrase, penalty, warning)
RISK_SIGNALS: tuple[tuple[str, int, str], ...] = (
    ("miracle", 3, 'JD implies "miracle needed" expectations'),
    ("wear many hats", 2, "Wear-many-hats language (resource constrained)"),
    ("startup mentality", 1, "Startup mentality language"),
    ("unicorn", 2, 'Looking for a "unicorn" (unrealistic expectations)'),
    ("do it all", 3, 'Expects one person to "do it all"'),
)

_WORD_NUMBERS = {"one": 1, "two": 2, "three": 3, "four": 4, "five": 5}
_DAY_COUNT = r"(\d|one|two|three|four|five)"
_ONSITE = r"(?:in[- ](?:the[- ])?office|on[- ]?site|in[- ]person)"

ONSITE_DAYS_RES: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\b{_DAY_COUNT}\s*\+?\s*(?:days?|x)\s*(?:(?:per|a|/)\s*week\s*)?{_ONSITE}",
        re.IGNORECASE,
    ),
    re.compile(
        rf"\b{_ONSITE}\s*(?:at\s+least\s+)?{_DAY_COUNT}\s*\+?\s*(?:days?|x)\b",
        re.IGNORECASE,
    ),
)
TRAVEL_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\btravel[^.\n%]{0,40}?(\d{1,3})\s*%", re.IGNORECASE),
    re.compile(r"(\d{1,3})\s*%[^.\n]{0,20}?\btravel", re.IGNORECASE),
)

_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}
_OPEN_ENDED = {"", "present", "current", "now", "today"}

GAP_SEVERITY: dict[tuple[str, str], GapSeverity] = {
    ("Met", "Must"): "None",
    ("Met", "Preferred"): "None",
    ("Partial", "Must"): "Low",
    ("Partial", "Preferred"): "Low",
    ("Missing", "Preferred"): "Medium",
    ("Missing", "Must"): "High",
}


class FitScoringService:
    """Service for computing deterministic fit scores for job postings."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()

    def score_job(
        self,
        job: Job,
        profile: Profile,
        claims: Sequence[Claim] = (),
        *,
        as_of: date | None = None,
    ) -> ScoreResult:
        """Score a job against a profile and the user's claims.

        Args:
            job: Job posting snapshot.
            profile: User preferences and hard filters.
            claims: Claims ledger snapshot. Only auto-usable, non-rejected
                claims are used for requirement matching.
            as_of: Date used for open-ended tenure estimates. Defaults to today.

        Returns:
            ScoreResult. A non-empty `disqualifiers` list always comes with a
            zero score and a zeroed breakdown.
        """
        today = as_of or date.today()
        description = job.job_description or ""
        text = description.lower()

        disqualifiers: list[str] = []
        risk_warnings: list[str] = []
        reasons_to_pursue: list[str] = []
        reasons_to_pass: list[str] = []

        requirements = extract_requirements(description)
        if not description.strip():
            risk_warnings.append(
                "Job description is empty; requirements could not be extracted"
            )

        constraints = self.check_constraints(job, profile)
        disqualifiers.extend(constraints.hard_violations)
        risk_warnings.extend(constraints.soft_warnings)

        self._check_keyword_disqualifiers(job, profile, disqualifiers)
        self._check_seed_stage(job, profile, disqualifiers, risk_warnings)
        self._check_required_benefits(text, profile, risk_warnings)
        risk_penalty = self._detect_risk_flags(text, risk_warnings)

        bundles = self._usable_bundles(claims)
        requirements = [self.match_requirement(r, bundles, as_of=today) for r in requirements]
        summary = _must_have_summary(requirements)
        gap_suggestions = _gap_suggestions(requirements)

        if disqualifiers:
            logger.info(
                f"Job {job.title or job.id!r} at {job.company or 'unknown company'} "
                f"disqualified: {'; '.join(disqualifiers)}"
            )
            return ScoreResult(
                fit_score=0,
                fit_label="Pass",
                breakdown=ScoreBreakdown(),
                disqualifiers=disqualifiers,
                risk_warnings=risk_warnings,
                reasons_to_pursue=[],
                reasons_to_pass=list(disqualifiers),
                requirements_extracted=requirements,
                must_have_summary=summary,
                gap_suggestions=gap_suggestions,
            )

        domain_text = text
        if job.research_brief is not None:
            domain_text = f"{text}\n{job.research_brief.text().lower()}"

        breakdown = ScoreBreakdown(
            role_scope_authority=self.score_role_scope(
                job, profile, text, reasons_to_pursue, reasons_to_pass
            ),
            compensation_benefits=self.score_compensation(
                job, profile, text, reasons_to_pursue, reasons_to_pass
            ),
            company_stage_ability=self.score_company_stage(text, reasons_to_pursue),
            domain_fit=self.score_domain_fit(domain_text, reasons_to_pursue),
            risk_penalty=risk_penalty,
        )
        fit_score = max(0, min(100, breakdown.total))

        if summary.total:
            if summary.met / summary.total >= 0.7:
                reasons_to_pursue.append(
                    f"Meets most must-have requirements ({summary.met}/{summary.total})"
                )
            elif summary.missing * 2 > summary.total:
                reasons_to_pass.append(
                    f"Missing {summary.missing} of {summary.total} must-have requirements"
                )

        label = fit_label(
            fit_score, pursue_min=self.config.pursue_min, maybe_min=self.config.maybe_min
        )
        logger.debug(
            f"Scored {job.title or job.id!r}: {fit_score} ({label}) "
            f"role={breakdown.role_scope_authority} comp={breakdown.compensation_benefits} "
            f"stage={breakdown.company_stage_ability} domain={breakdown.domain_fit} "
            f"risk=-{breakdown.risk_penalty}"
        )

        return ScoreResult(
            fit_score=fit_score,
            fit_label=label,
            breakdown=breakdown,
            disqualifiers=[],
            risk_warnings=risk_warnings,
            reasons_to_pursue=reasons_to_pursue,
            reasons_to_pass=reasons_to_pass,
            requirements_extracted=requirements,
            must_have_summary=summary,
            gap_suggestions=gap_suggestions,
        )

    def resolve_compensation(self, job: Job) -> CompRange:
        """Job compensation, parsed from text when the job carries no numbers."""
        if job.comp_min or job.comp_max:
            return CompRange(min=job.comp_min or None, max=job.comp_max or None)
        for source in (job.comp_range, job.job_description):
            parsed = parse_comp_from_text(source)
            if parsed:
                return parsed
        return CompRange()

    def check_constraints(self, job: Job, profile: Profile) -> ConstraintResult:
        """Evaluate the profile's hard filters against a job."""
        hard_violations: list[str] = []
        soft_warnings: list[str] = []
        filters = profile.hard_filters or HardFilters()
        text = (job.job_description or "").lower()

        self._check_employment_type(job, filters, hard_violations)
        self._check_compensation_floor(job, profile, filters, hard_violations)
        self._check_travel(text, filters, hard_violations)
        self._check_onsite_days(job, text, filters, hard_violations)
        self._check_visa(text, filters, hard_violations, soft_warnings)

        if hard_violations:
            return ConstraintResult(
                passed=False,
                hard_violations=hard_violations,
                soft_warnings=soft_warnings,
            )
        return ConstraintResult(
            passed=True,
            hard_violations=[],
            soft_warnings=soft_warnings,
        )

    def score_role_scope(
        self,
        job: Job,
        profile: Profile,
        text: str,
        reasons_to_pursue: list[str],
        reasons_to_pass: list[str],
    ) -> int:
        """Score title seniority, strategic ownership and team leadership."""
        title = job.title or ""
        score = 0

        if any(contains_phrase(title, senior) for senior in SENIOR_TITLES):
            score += 12
            reasons_to_pursue.append("Senior leadership title")
        elif any(contains_phrase(title, role) for role in profile.target_roles if role.strip()):
            score += 12
            reasons_to_pursue.append("Title matches a target role")
        else:
            score += 4
            reasons_to_pass.append("Title may not indicate senior leadership")

        strategy_count = sum(1 for signal in STRATEGY_SIGNALS if signal in text)
        if strategy_count >= 3:
            score += 12
            reasons_to_pursue.append("Strong strategic ownership signals")
        elif strategy_count >= 1:
            score += 7
            reasons_to_pursue.append("Some strategic scope indicated")
        else:
            score += 2
            reasons_to_pass.append("Limited strategic scope signals in JD")

        if any(signal in text for signal in TEAM_SIGNALS):
            score += 6
            reasons_to_pursue.append("People management / team leadership")
        else:
            score += 2

        return min(score, self.config.role_scope_max)

    def score_compensation(
        self,
        job: Job,
        profile: Profile,
        text: str,
        reasons_to_pursue: list[str],
        reasons_to_pass: list[str],
    ) -> int:
        """Score stated compensation against the profile plus benefit signals."""
        comp = self.resolve_compensation(job)
        reference = comp.min if comp.min is not None else comp.max
        score = 0

        if reference is None:
            score += 7
        elif reference >= profile.comp_target:
            score += 15
            reasons_to_pursue.append(f"Comp min (${reference:,}) meets or exceeds target")
        elif reference >= profile.comp_floor:
            score += 10
            reasons_to_pursue.append(f"Comp min (${reference:,}) meets floor")
        else:
            score += 3
            reasons_to_pass.append("Compensation may be below target")

        benefit_count = count_benefit_signals(text)
        score += min(benefit_count * 2, 10)
        if benefit_count >= 3:
            reasons_to_pursue.append("Strong benefits package indicated")

        for benefit in profile.preferred_benefits:
            if job_mentions_benefit(text, benefit):
                reasons_to_pursue.append(f"Offers preferred benefit: {benefit_label(benefit)}")

        return min(score, self.config.compensation_max)

    def score_company_stage(self, text: str, reasons_to_pursue: list[str]) -> int:
        """Score the strongest company-stage signal (ability to pay)."""
        best = DEFAULT_STAGE_SCORE
        for signal, points in STAGE_SIGNALS.items():
            if contains_phrase(text, signal):
                best = max(best, points)

        score = min(best, self.config.company_stage_max)
        if score >= 15:
            reasons_to_pursue.append("Company stage suggests ability to pay")
        return score

    def score_domain_fit(self, text: str, reasons_to_pursue: list[str]) -> int:
        """Score growth/lifecycle/GTM domain signals."""
        domain_count = sum(1 for signal in DOMAIN_SIGNALS if signal in text)
        if domain_count >= 4:
            reasons_to_pursue.append("Strong domain alignment (growth/lifecycle/GTM)")
        elif domain_count >= 2:
            reasons_to_pursue.append("Moderate domain alignment")
        return min(
            round_half_up(domain_count * DOMAIN_POINTS_PER_SIGNAL), self.config.domain_fit_max
        )

    def match_requirement(
        self,
        requirement: Requirement,
        bundles: Sequence[ExperienceBundle],
        *,
        as_of: date | None = None,
    ) -> Requirement:
        """Return a copy of `requirement` annotated with match status and evidence."""
        today = as_of or date.today()
        if requirement.type == "tool":
            update = self._match_tool(requirement, bundles)
        elif requirement.type == "experience":
            update = self._match_experience(requirement, bundles, today)
        else:
            update = self._match_text(requirement, bundles)

        match = update.get("match", "Missing")
        update["gap_severity"] = GAP_SEVERITY[(match, requirement.priority)]
        return requirement.model_copy(
            update={"match": match, "evidence": None, "user_evidence": None, **update}
        )

    def format_result(self, result: ScoreResult, job: Job | None = None) -> str:
        """Format ScoreResult for CLI output."""
        lines: list[str] = []
        if job is not None:
            lines.append(f"{job.company or 'Unknown company'} - {job.title or 'Untitled role'}")

        lines.append(f"Fit: {result.fit_label.upper()} (score={result.fit_score})")
        breakdown = result.breakdown
        lines.append(
            "Breakdown: "
            f"role_scope={breakdown.role_scope_authority} "
            f"compensation={breakdown.compensation_benefits} "
            f"company_stage={breakdown.company_stage_ability} "
            f"domain_fit={breakdown.domain_fit} "
            f"risk_penalty=-{breakdown.risk_penalty}"
        )
        summary = result.must_have_summary
        if summary.total:
            lines.append(
                "Must-haves: "
                f"{summary.met} met, {summary.partial} partial, {summary.missing} missing "
                f"(of {summary.total})"
            )

        if result.disqualifiers:
            lines.append(f"Disqualifiers: {'; '.join(result.disqualifiers)}")
        if result.risk_warnings:
            lines.append(f"Warnings: {'; '.join(result.risk_warnings)}")
        if result.reasons_to_pursue:
            lines.append(f"Reasons to pursue: {'; '.join(result.reasons_to_pursue)}")
        if result.reasons_to_pass:
            lines.append(f"Reasons to pass: {'; '.join(result.reasons_to_pass)}")

        for requirement in result.requirements_extracted:
            evidence = f" <- {requirement.evidence}" if requirement.evidence else ""
            lines.append(
                f"  [{requirement.match}] ({requirement.priority}, {requirement.type}) "
                f"{requirement.description}{evidence}"
            )

        if result.gap_suggestions:
            lines.append("Gaps:")
            lines.extend(f"  - {suggestion}" for suggestion in result.gap_suggestions)

        return "\n".join(lines)

    def _usable_bundles(self, claims: Sequence[Claim]) -> list[ExperienceBundle]:
        usable = [
            claim
            for claim in get_auto_usable_claims(claims)
            if claim.verification_status != "Rejected"
        ]
        return build_experience_bundles(usable)

    def _check_employment_type(
        self, job: Job, filters: HardFilters, hard_violations: list[str]
    ) -> None:
        employment = job.employment_type
        if employment == "Unknown":
            return

        if filters.employment_type == "ft_only" and employment != "Full-time":
            hard_violations.append(
                f"Employment type '{employment}' is excluded by your full-time-only filter"
            )
        elif filters.employment_type == "exclude_contract" and employment in {
            "Contract",
            "Freelance",
        }:
            hard_violations.append(
                f"Employment type '{employment}' is excluded by your no-contract filter"
            )

    def _check_compensation_floor(
        self,
        job: Job,
        profile: Profile,
        filters: HardFilters,
        hard_violations: list[str],
    ) -> None:
        floor = max(profile.comp_floor, filters.min_base_salary)
        if not floor:
            return

        comp = self.resolve_compensation(job)
        if comp.max is not None and comp.max < floor:
            hard_violations.append(
                f"Max compensation (${comp.max:,}) is below your compensation floor "
                f"(${floor:,})"
            )

    def _check_travel(
        self, text: str, filters: HardFilters, hard_violations: list[str]
    ) -> None:
        travel = _parse_travel_percent(text)
        if travel is not None and travel > filters.max_travel_percent:
            hard_violations.append(
                f"Travel requirement ({travel}%) exceeds your maximum "
                f"({filters.max_travel_percent}%)"
            )

    def _check_onsite_days(
        self, job: Job, text: str, filters: HardFilters, hard_violations: list[str]
    ) -> None:
        days = _parse_onsite_days(text)
        if days is None and job.location_type == "In-person":
            days = 5
        if days is not None and days > filters.max_onsite_days_per_week:
            hard_violations.append(
                f"Requires {days} onsite day(s) per week; your maximum is "
                f"{filters.max_onsite_days_per_week}"
            )

    def _check_visa(
        self,
        text: str,
        filters: HardFilters,
        hard_violations: list[str],
        soft_warnings: list[str],
    ) -> None:
        if not filters.requires_visa_sponsorship:
            return

        supports = _job_supports_visa_sponsorship(text)
        if supports is True:
            return
        if supports is False:
            hard_violations.append("Job does not offer visa sponsorship")
        else:
            soft_warnings.append("Could not verify visa sponsorship")

    def _check_keyword_disqualifiers(
        self, job: Job, profile: Profile, disqualifiers: list[str]
    ) -> None:
        title = (job.title or "").lower()
        text = (job.job_description or "").lower()

        is_paid_media_operator = any(
            keyword in title
            or f"{keyword} role" in text
            or f"hands-on {keyword}" in text
            for keyword in PAID_MEDIA_KEYWORDS
        )
        has_paid_media_heavy = any(
            phrase in text for phrase in ("manage paid", "run paid", "execute paid")
        ) and any(phrase in text for phrase in ("day-to-day", "hands-on", "in-platform"))
        if is_paid_media_operator or has_paid_media_heavy:
            disqualifiers.append(
                "Role appears to require hands-on paid media account management as core function"
            )

        for phrase in profile.disqualifiers:
            if phrase.strip() and (contains_phrase(text, phrase) or contains_phrase(title, phrase)):
                disqualifiers.append(f"Matches your disqualifier: '{phrase.strip()}'")

    def _check_seed_stage(
        self,
        job: Job,
        profile: Profile,
        disqualifiers: list[str],
        risk_warnings: list[str],
    ) -> None:
        text = (job.job_description or "").lower()
        comp_range = (job.comp_range or "").lower()
        is_seed_stage = any(keyword in text for keyword in SEED_STAGE_KEYWORDS) or (
            "seed" in comp_range
        )
        if not is_seed_stage:
            return

        if profile.scoring_policy.seed_stage == "disqualify":
            disqualifiers.append("Company appears to be seed-stage")
        else:
            risk_warnings.append(
                "Company appears to be seed-stage; ability to pay may be limited"
            )

    def _check_required_benefits(
        self, text: str, profile: Profile, risk_warnings: list[str]
    ) -> None:
        for benefit in profile.required_benefits:
            if not benefit.strip():
                continue
            if not job_mentions_benefit(text, benefit):
                risk_warnings.append(
                    f"Could not verify required benefit: {benefit_label(benefit)}"
                )

    def _detect_risk_flags(self, text: str, risk_warnings: list[str]) -> int:
        penalty = 0
        for phrase, points, warning in RISK_SIGNALS:
            if phrase in text:
                penalty += points
                risk_warnings.append(warning)
        return min(penalty, self.config.risk_penalty_max)

    def _match_tool(
        self, requirement: Requirement, bundles: Sequence[ExperienceBundle]
    ) -> dict:
        tool = canonical_tool(requirement.description)
        display = TOOL_VOCABULARY.get(tool, requirement.description)

        for bundle in bundles:
            for used in bundle.tools:
                if tools_match(
                    tool,
                    used,
                    fuzzy=self.config.tool_fuzzy_match,
                    threshold=self.config.tool_fuzzy_threshold,
                ):
                    return _met(bundle, f"Used {used}")
            for line in bundle.evidence_lines():
                if tool in find_tools(line) or contains_phrase(line, display):
                    return _met(bundle, line)

        related = related_tools(tool)
        if related:
            for bundle in bundles:
                candidates = [*bundle.tools]
                for line in bundle.evidence_lines():
                    candidates.extend(TOOL_VOCABULARY.get(key, key) for key in find_tools(line))
                for candidate in candidates:
                    if canonical_tool(candidate) in related:
                        return {
                            "match": "Partial",
                            "evidence": f"{bundle.label}: related tool {candidate}",
                            "user_evidence": candidate,
                        }

        return {"match": "Missing"}

    def _match_experience(
        self,
        requirement: Requirement,
        bundles: Sequence[ExperienceBundle],
        today: date,
    ) -> dict:
        needed = requirement.years_needed
        terms = keywords(experience_subject(requirement))
        partial: dict | None = None

        for bundle in bundles:
            text = " ".join([bundle.role, *bundle.evidence_lines()])
            if terms and keyword_overlap(terms, text) < self.config.keyword_match_ratio:
                continue

            years = estimate_years(bundle.start_date, bundle.end_date, as_of=today)
            if needed is None or years >= needed:
                return {
                    "match": "Met",
                    "evidence": f"{bundle.label} ({years}+ yrs)",
                    "user_evidence": bundle.label,
                }
            if partial is None and years >= needed * 0.6:
                partial = {
                    "match": "Partial",
                    "evidence": f"{bundle.label} ({years} yrs, need {needed})",
                    "user_evidence": bundle.label,
                }

        if partial is not None:
            return partial

        if needed is not None and bundles:
            total = sum(
                estimate_years(b.start_date, b.end_date, as_of=today) for b in bundles
            )
            if total >= needed:
                plural = "s" if len(bundles) != 1 else ""
                return {
                    "match": "Partial",
                    "evidence": f"{total} total years across {len(bundles)} role{plural}",
                }

        return {"match": "Missing"}

    def _match_text(
        self, requirement: Requirement, bundles: Sequence[ExperienceBundle]
    ) -> dict:
        terms = keywords(requirement.description)
        best_ratio = 0.0
        best: tuple[ExperienceBundle, str] | None = None
        related: tuple[ExperienceBundle, str] | None = None

        for bundle in bundles:
            lines = [*bundle.evidence_lines(), bundle.role]
            for line in lines:
                if contains_phrase(line, requirement.description):
                    return _met(bundle, line)
                ratio = keyword_overlap(terms, line)
                if ratio > best_ratio:
                    best_ratio, best = ratio, (bundle, line)

            if related is None and terms:
                bundle_ratio = keyword_overlap(terms, " ".join(lines))
                if bundle_ratio >= self.config.keyword_match_ratio:
                    line = max(lines, key=lambda candidate: keyword_overlap(terms, candidate))
                    related = (bundle, line)

        if best is not None and best_ratio >= self.config.direct_match_ratio:
            return _met(*best)
        if related is not None:
            bundle, line = related
            return {
                "match": "Partial",
                "evidence": f"{bundle.label}: {line}",
                "user_evidence": line,
            }
        return {"match": "Missing"}


def score_job(
    job: Job,
    profile: Profile,
    claims: Sequence[Claim] = (),
    *,
    config: ScoringConfig | None = None,
    as_of: date | None = None,
) -> ScoreResult:
    """Score a job with a one-off FitScoringService."""
    return FitScoringService(config=config).score_job(job, profile, claims, as_of=as_of)


def _met(bundle: ExperienceBundle, line: str) -> dict:
    return {
        "match": "Met",
        "evidence": f"{bundle.label}: {line}",
        "user_evidence": line,
    }


def _must_have_summary(requirements: Sequence[Requirement]) -> MustHaveSummary:
    must = [r for r in requirements if r.priority == "Must"]
    return MustHaveSummary(
        total=len(must),
        met=sum(1 for r in must if r.match == "Met"),
        partial=sum(1 for r in must if r.match == "Partial"),
        missing=sum(1 for r in must if r.match == "Missing"),
    )


def _gap_suggestions(requirements: Sequence[Requirement]) -> list[str]:
    suggestions: list[str] = []
    for requirement in requirements:
        if requirement.priority != "Must" or requirement.match != "Missing":
            continue
        if requirement.type == "tool":
            suggestion = (
                f"Add a Tool claim for {requirement.description} if you have used it"
            )
        elif requirement.type == "experience" and requirement.years_needed is not None:
            suggestion = (
                f"Add an Experience claim showing {requirement.years_needed}+ years "
                f"of {experience_subject(requirement)}"
            )
        else:
            suggestion = f"Add evidence for: {requirement.description}"
        if suggestion not in suggestions:
            suggestions.append(suggestion)
    return suggestions


def _parse_travel_percent(text: str) -> int | None:
    values = [
        int(match.group(1))
        for pattern in TRAVEL_RES
        for match in pattern.finditer(text)
        if int(match.group(1)) <= 100
    ]
    return max(values) if values else None


def _parse_onsite_days(text: str) -> int | None:
    values: list[int] = []
    for pattern in ONSITE_DAYS_RES:
        for match in pattern.finditer(text):
            raw = match.group(1).lower()
            value = _WORD_NUMBERS.get(raw) or int(raw)
            if 0 <= value <= 7:
                values.append(min(value, 5))
    return max(values) if values else None


def parse_claim_date(value: str | None) -> date | None:
    """Parse resume-style dates: 'Jan 2020', 'January 2020', '01/2020', '2020-01', '2020'."""
    raw = (value or "").strip().lower()
    if not raw:
        return None

    match = re.search(r"([a-z]+)\.?\s+(\d{4})", raw)
    if match and match.group(1)[:3] in _MONTHS:
        return date(int(match.group(2)), _MONTHS[match.group(1)[:3]], 1)

    match = re.fullmatch(r"(\d{1,2})/(\d{4})", raw)
    if match and 1 <= int(match.group(1)) <= 12:
        return date(int(match.group(2)), int(match.group(1)), 1)

    match = re.fullmatch(r"(\d{4})-(\d{1,2})(?:-\d{1,2})?", raw)
    if match and 1 <= int(match.group(2)) <= 12:
        return date(int(match.group(1)), int(match.group(2)), 1)

    match = re.fullmatch(r"(\d{4})", raw)
    if match:
        return date(int(match.group(1)), 1, 1)

    return None


def estimate_years(
    start_date: str | None, end_date: str | None, *, as_of: date | None = None
) -> int:
    """Whole years between two resume dates. Open-ended roles run to `as_of`."""
    start = parse_claim_date(start_date)
    if start is None:
        return 0

    today = as_of or date.today()
    if (end_date or "").strip().lower() in _OPEN_ENDED:
        end = today
    else:
        end = parse_claim_date(end_date) or today

    days = (end - start).days
    return max(0, round_half_up(days / 365.25))


def _job_supports_visa_sponsorship(text: str) -> bool | None:
    if not text:
        return None

    negative_patterns = [
        "no visa sponsorship",
        "no sponsorship",
        "without sponsorship",
        "cannot sponsor",
        "can't sponsor",
        "do not sponsor",
        "don't sponsor",
        "unable to sponsor",
        "not provide sponsorship",
        "not offer sponsorship",
        "must be authorized to work",
    ]
    if any(pat in text for pat in negative_patterns):
        return False

    positive_patterns = [
        "visa sponsorship available",
        "will sponsor",
        "sponsorship available",
        "we sponsor visas",
        "can sponsor visas",
        "sponsor visa",
    ]
    if any(pat in text for pat in positive_patterns):
        return True

    return None
