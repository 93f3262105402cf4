"""
Stage 1: Feature Extraction
===========================
Maps raw Lead fields to normalized 0-100 scores, one per dimension.

Dimensions:
- Company size (employee count ladder, bracket label fallback)
- Industry value (ranked industry table)
- Job title authority (maximum over matched title keywords)
- Funding stage (stage keywords, then currency amount)
- Tech stack modernity (modern allow-list vs legacy deny-list)
- Engagement signals (buying intent + recent activity)
- Market position (recognized brands, public companies, domain quality)
- Growth indicators (hiring/expansion language, recent funding)

Never raises. Missing fields get the documented default from
DIMENSION_DEFAULTS; unparseable fields are logged as ExtractionWarning.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

from ..models.schemas import BuyingIntent, Dimension, DimensionFeature, Lead
from ..errors import ExtractionWarning
from ..config.settings import (
    ACTIVITY_KEYWORDS,
    ACTIVITY_NO_MATCH_SCORE,
    BLOG_PLATFORMS,
    BUYING_INTENT_SCORES,
    COMPANY_SIZE_BRACKETS,
    DIMENSION_DEFAULTS,
    EMPLOYEE_COUNT_LADDER,
    FUNDING_AMOUNT_LADDER,
    FUNDING_AMOUNT_PATTERN,
    FUNDING_BARE_DOLLAR_MINIMUM,
    FUNDING_STAGE_KEYWORDS,
    GROWTH_KEYWORDS,
    GROWTH_SCORING,
    INDUSTRY_VALUES,
    JOB_TITLE_CATEGORIES,
    LARGE_COMPANY_EMPLOYEES,
    LEGACY_TECH,
    MARKET_POSITION_SCORES,
    MODERN_TECH,
    PROFESSIONAL_TLDS,
    RECENT_FUNDING_KEYWORDS,
    RECOGNIZED_COMPANIES,
    TECH_SCORING,
)

logger = logging.getLogger(__name__)

FeatureMap = Dict[Dimension, DimensionFeature]

# Plural and verb endings accepted after activity and growth keywords
INFLECTION_SUFFIX = r"(?:s|es|ed|ing)?(?!\w)"


def _word_pattern(keyword: str) -> "re.Pattern[str]":
    """Case-insensitive, word-bounded pattern for a literal keyword"""
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


def _ladder(value: float, ladder: List[Tuple[float, int]]) -> int:
    for minimum, score in ladder:
        if value >= minimum:
            return score
    return ladder[-1][1]


class FeatureExtractionStage:
    """
    Stage 1: Extract per-dimension scores from a lead.
    """

    def __init__(self):
        self._compile_patterns()

    def _compile_patterns(self):
        """Pre-compile keyword tables for performance"""
        self.industry_patterns = [
            (score, keyword, _word_pattern(keyword))
            for score, keywords in INDUSTRY_VALUES
            for keyword in keywords
        ]

        self.title_patterns = []
        for category, entries in JOB_TITLE_CATEGORIES.items():
            for pattern, score in entries:
                self.title_patterns.append({
                    "category": category,
                    "regex": re.compile(rf"\b(?:{pattern})(?!\w)", re.IGNORECASE),
                    "score": score,
                })

        self.funding_patterns = [
            (re.compile(pattern, re.IGNORECASE), score, label)
            for pattern, score, label in FUNDING_STAGE_KEYWORDS
        ]
        self.funding_amount = re.compile(FUNDING_AMOUNT_PATTERN, re.IGNORECASE)
        self.recent_funding = [_word_pattern(k) for k in RECENT_FUNDING_KEYWORDS]

        self.modern_tech = [_word_pattern(t) for t in MODERN_TECH]
        self.legacy_tech = [_word_pattern(t) for t in LEGACY_TECH]

        self.activity_patterns = [
            (re.compile(rf"\b(?:{pattern}){INFLECTION_SUFFIX}", re.IGNORECASE), score)
            for pattern, score in ACTIVITY_KEYWORDS
        ]
        self.growth_patterns = [
            (keyword, re.compile(rf"\b{re.escape(keyword)}{INFLECTION_SUFFIX}", re.IGNORECASE))
            for keyword in GROWTH_KEYWORDS
        ]
        self.recognized_companies = [
            (name, _word_pattern(name)) for name in RECOGNIZED_COMPANIES
        ]

    def process(self, lead: Lead) -> FeatureMap:
        """
        Extract dimension features from a lead.

        Args:
            lead: Lead to analyze

        Returns:
            Mapping of every dimension to its DimensionFeature
        """
        features, _ = self.extract_with_warnings(lead)
        return features

    def extract_scores(self, lead: Lead) -> Dict[Dimension, int]:
        """Plain {dimension: score} view of process()"""
        return {dim: feature.score for dim, feature in self.process(lead).items()}

    def extract_with_warnings(
        self, lead: Lead
    ) -> Tuple[FeatureMap, List[ExtractionWarning]]:
        """Like process(), also returning the extraction warnings raised on the way"""
        warnings: List[ExtractionWarning] = []

        features = {
            Dimension.COMPANY_SIZE: self._score_company_size(lead, warnings),
            Dimension.INDUSTRY_VALUE: self._score_industry(lead),
            Dimension.JOB_TITLE_AUTHORITY: self._score_job_title(lead),
            Dimension.FUNDING_STAGE: self._score_funding(lead, warnings),
            Dimension.TECH_STACK_MODERNITY: self._score_tech_stack(lead),
            Dimension.ENGAGEMENT_SIGNALS: self._score_engagement(lead),
            Dimension.MARKET_POSITION: self._score_market_position(lead),
            Dimension.GROWTH_INDICATORS: self._score_growth(lead),
        }

        for warning in warnings:
            logger.warning("Lead %r: %s", lead.company_name, warning)

        return features, warnings

    # =========================================================================
    # Dimension scorers
    # =========================================================================

    def _score_company_size(
        self, lead: Lead, warnings: List[ExtractionWarning]
    ) -> DimensionFeature:
        """Score company size, preferring the raw employee count"""
        if lead.employee_count is not None:
            count = lead.employee_count
            return DimensionFeature(
                score=_ladder(count, EMPLOYEE_COUNT_LADDER),
                reasoning=f"{count:,} employees",
                raw_value=f"{count:,}",
            )

        label = (lead.company_size or "").strip()
        if not label:
            return self._default(Dimension.COMPANY_SIZE, "No company size data")

        if label in COMPANY_SIZE_BRACKETS:
            return DimensionFeature(
                score=COMPANY_SIZE_BRACKETS[label],
                reasoning=f"Company size bracket {label}",
                raw_value=label,
            )

        estimate = self._parse_employee_range(label)
        if estimate is None:
            default = DIMENSION_DEFAULTS[Dimension.COMPANY_SIZE.value]
            warnings.append(
                ExtractionWarning("company_size", label, default, "no employee figure found")
            )
            return DimensionFeature(
                score=default,
                reasoning=f"Unrecognized company size '{label}'",
                raw_value=label,
                defaulted=True,
            )

        return DimensionFeature(
            score=_ladder(estimate, EMPLOYEE_COUNT_LADDER),
            reasoning=f"Company size '{label}' (~{estimate:,} employees)",
            raw_value=label,
        )

    def _score_industry(self, lead: Lead) -> DimensionFeature:
        """Score industry against the ranked industry table"""
        industry = (lead.industry or "").strip()
        if not industry:
            return self._default(Dimension.INDUSTRY_VALUE, "No industry data")

        best: Optional[Tuple[int, str]] = None
        for score, keyword, regex in self.industry_patterns:
            if regex.search(industry) and (best is None or score > best[0]):
                best = (score, keyword)

        if best is None:
            return DimensionFeature(
                score=DIMENSION_DEFAULTS[Dimension.INDUSTRY_VALUE.value],
                reasoning=f"Unranked industry: {industry}",
                raw_value=industry,
            )

        return DimensionFeature(
            score=best[0],
            reasoning=f"Industry {industry} ranked via '{best[1]}'",
            raw_value=industry,
        )

    def _score_job_title(self, lead: Lead) -> DimensionFeature:
        """Highest authority among all keywords found in the title"""
        title = (lead.job_title or "").strip()
        if not title:
            return self._default(Dimension.JOB_TITLE_AUTHORITY, "No job title")

        best = None
        for entry in self.title_patterns:
            if entry["regex"].search(title) and (best is None or entry["score"] > best["score"]):
                best = entry

        if best is None:
            return DimensionFeature(
                score=DIMENSION_DEFAULTS[Dimension.JOB_TITLE_AUTHORITY.value],
                reasoning=f"Unrecognized title: {title}",
                raw_value=title,
            )

        category = best["category"].replace("_", " ")
        return DimensionFeature(
            score=best["score"],
            reasoning=f"{title} ({category})",
            raw_value=title,
        )

    def _score_funding(
        self, lead: Lead, warnings: List[ExtractionWarning]
    ) -> DimensionFeature:
        """Score funding from stage keywords, then from a raised amount"""
        texts = [t.strip() for t in (lead.funding_stage, lead.funding_info) if t and t.strip()]
        if not texts:
            return self._default(Dimension.FUNDING_STAGE, "No funding data")

        raw_value = " / ".join(texts)

        for text in texts:
            for regex, score, label in self.funding_patterns:
                if regex.search(text):
                    return DimensionFeature(
                        score=score,
                        reasoning=f"Funding stage: {label}",
                        raw_value=raw_value,
                    )

        for text in texts:
            amount = self._parse_funding_amount(text)
            if amount is not None:
                return DimensionFeature(
                    score=_ladder(amount, FUNDING_AMOUNT_LADDER),
                    reasoning=f"Raised ~${amount:,.1f}M",
                    raw_value=raw_value,
                )

        default = DIMENSION_DEFAULTS[Dimension.FUNDING_STAGE.value]
        warnings.append(
            ExtractionWarning("funding_info", raw_value, default, "no stage or amount recognized")
        )
        return DimensionFeature(
            score=default,
            reasoning="Funding details not recognized",
            raw_value=raw_value,
            defaulted=True,
        )

    def _score_tech_stack(self, lead: Lead) -> DimensionFeature:
        """Modern technologies add, legacy technologies subtract"""
        stack = [t for t in lead.tech_stack if t and t.strip()]
        if not stack:
            return self._default(Dimension.TECH_STACK_MODERNITY, "No tech stack data")

        modern = [t for t in stack if any(p.search(t) for p in self.modern_tech)]
        legacy = [t for t in stack if any(p.search(t) for p in self.legacy_tech)]

        score = (
            TECH_SCORING["base"]
            + min(len(modern) * TECH_SCORING["modern_bonus"], TECH_SCORING["modern_cap"])
            - min(len(legacy) * TECH_SCORING["legacy_penalty"], TECH_SCORING["legacy_cap"])
        )
        score = max(0, min(100, score))

        return DimensionFeature(
            score=score,
            reasoning=f"{len(modern)} modern, {len(legacy)} legacy of {len(stack)} technologies",
            raw_value=", ".join(stack),
        )

    def _score_engagement(self, lead: Lead) -> DimensionFeature:
        """Combine declared buying intent with recent activity keywords"""
        intent_score = BUYING_INTENT_SCORES.get(lead.buying_intent.value)
        activity = (lead.recent_activity or "").strip()

        activity_score = None
        if activity:
            matched = [score for regex, score in self.activity_patterns if regex.search(activity)]
            activity_score = max(matched) if matched else ACTIVITY_NO_MATCH_SCORE

        parts = []
        if intent_score is not None:
            parts.append(f"{lead.buying_intent.value} buying intent")
        if activity:
            parts.append(activity)

        if intent_score is None and activity_score is None:
            return self._default(Dimension.ENGAGEMENT_SIGNALS, "No engagement data")

        if intent_score is not None and activity_score is not None:
            score = int((intent_score + activity_score) / 2 + 0.5)
        else:
            score = intent_score if intent_score is not None else activity_score

        return DimensionFeature(
            score=score,
            reasoning="Engagement: " + "; ".join(parts),
            raw_value="; ".join(parts),
        )

    def _score_market_position(self, lead: Lead) -> DimensionFeature:
        """Recognized brands and public companies first, then website quality"""
        name = lead.company_name or ""
        for company, regex in self.recognized_companies:
            if regex.search(name):
                return DimensionFeature(
                    score=MARKET_POSITION_SCORES["recognized"],
                    reasoning=f"Recognized market leader ({company})",
                    raw_value=name,
                )

        funding_text = " ".join(t for t in (lead.funding_stage, lead.funding_info) if t)
        if re.search(r"\b(ipo|public|nasdaq|nyse)\b", funding_text, re.IGNORECASE):
            return DimensionFeature(
                score=MARKET_POSITION_SCORES["public"],
                reasoning="Publicly traded company",
                raw_value=funding_text,
            )

        candidates = []
        if self._is_large_company(lead):
            candidates.append((MARKET_POSITION_SCORES["large_company"], "Large established company"))

        website = (lead.website or "").strip()
        if website:
            candidates.append(self._score_website(website))

        if not candidates:
            return self._default(Dimension.MARKET_POSITION, "No market position data")

        score, reasoning = max(candidates, key=lambda c: c[0])
        return DimensionFeature(
            score=score,
            reasoning=reasoning,
            raw_value=website or name,
        )

    def _score_growth(self, lead: Lead) -> DimensionFeature:
        """Hiring/expansion language, recent funding and headcount"""
        activity = (lead.recent_activity or "").strip()
        funding_text = " ".join(t for t in (lead.funding_stage, lead.funding_info) if t)

        if not activity and not funding_text:
            return self._default(Dimension.GROWTH_INDICATORS, "No growth data")

        score = GROWTH_SCORING["base"]
        signals = []

        keywords = [k for k, regex in self.growth_patterns if regex.search(activity)]
        if keywords:
            score += min(len(keywords) * GROWTH_SCORING["keyword_bonus"], GROWTH_SCORING["keyword_cap"])
            signals.extend(keywords)

        if any(regex.search(funding_text) for regex in self.recent_funding):
            score += GROWTH_SCORING["recent_funding_bonus"]
            signals.append("recent funding")

        if (lead.employee_count or 0) > GROWTH_SCORING["headcount_threshold"]:
            score += GROWTH_SCORING["headcount_bonus"]
            signals.append(f"{lead.employee_count:,} employees")

        score = min(100, score)
        reasoning = f"Growth signals: {', '.join(signals)}" if signals else "No growth signals detected"

        return DimensionFeature(
            score=score,
            reasoning=reasoning,
            raw_value=", ".join(signals) if signals else None,
        )

    # =========================================================================
    # Helper functions
    # =========================================================================

    def _default(self, dimension: Dimension, reason: str) -> DimensionFeature:
        return DimensionFeature(
            score=DIMENSION_DEFAULTS[dimension.value],
            reasoning=reason,
            defaulted=True,
        )

    def _is_large_company(self, lead: Lead) -> bool:
        if lead.employee_count is not None:
            return lead.employee_count >= LARGE_COMPANY_EMPLOYEES
        label = (lead.company_size or "").strip()
        estimate = self._parse_employee_range(label) if label else None
        return estimate is not None and estimate >= LARGE_COMPANY_EMPLOYEES

    def _score_website(self, website: str) -> Tuple[int, str]:
        url = website if "//" in website else f"//{website}"
        host = (urlparse(url).netloc or website).lower()

        if any(platform in host for platform in BLOG_PLATFORMS):
            return MARKET_POSITION_SCORES["blog_platform"], f"Hosted on a blog platform ({host})"
        if any(host.endswith(tld) for tld in PROFESSIONAL_TLDS):
            return MARKET_POSITION_SCORES["professional_domain"], f"Professional domain ({host})"
        return MARKET_POSITION_SCORES["other_domain"], f"Website {host}"

    def _parse_employee_range(self, range_str: str) -> Optional[int]:
        """Parse employee range string to approximate count"""
        numbers = re.findall(r"\d+", range_str.replace(",", ""))
        if len(numbers) >= 2:
            return (int(numbers[0]) + int(numbers[1])) // 2
        elif len(numbers) == 1:
            return int(numbers[0])
        return None

    def _parse_funding_amount(self, text: str) -> Optional[float]:
        """Extract a raised amount, normalized to millions"""
        for match in self.funding_amount.finditer(text):
            dollar, number, unit = match.groups()
            # Commas only ever group thousands, e.g. "$1,500k" or "$2,000,000"
            amount = float(number.replace(",", ""))
            if unit:
                unit = unit.lower()
                if unit in ("b", "bn", "billion"):
                    return amount * 1000
                if unit in ("k", "thousand"):
                    return amount / 1000
                return amount
            if dollar and amount >= FUNDING_BARE_DOLLAR_MINIMUM:
                return amount / 1_000_000
        return None
