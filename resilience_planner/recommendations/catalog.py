"""
Static recommendation catalog.

Template descriptions may contain ``{assetName}`` and ``{assetCategory}``
placeholders, filled in by ``engine.format_template()``.

Tables
------
QUICK_WIN_TEMPLATES      : immediate actions for any high-risk asset.
MEDIUM_TERM_TEMPLATES    : 3-6 month plans for assets with risk > 7.
LONG_TERM_TEMPLATES      : 6+ month strategy for assets with risk > 8.5.
INDUSTRY_RECOMMENDATIONS : curated entries for a subset of industries.
DIVERSIFICATION_STRATEGY : added when the diversification score is below 5.
DEFAULT_RECOMMENDATIONS  : one per horizon, used only for empty buckets.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from resilience_planner.models.assessment import Recommendation
from resilience_planner.taxonomy.asset_taxonomy import Horizon, Industry

QUICK_WIN_TEMPLATES: tuple[Recommendation, ...] = (
    Recommendation(
        title="Document Critical Processes",
        description=(
            "Create detailed documentation for critical processes related to "
            "{assetName}. Include step-by-step procedures, key contacts, and "
            "troubleshooting guides."
        ),
    ),
    Recommendation(
        title="Implement Knowledge Sharing Sessions",
        description=(
            "Schedule regular knowledge sharing sessions for {assetName} to ensure "
            "multiple team members understand its operation and maintenance."
        ),
    ),
    Recommendation(
        title="Cross-Train Personnel",
        description=(
            "Identify and cross-train backup personnel who can step in if the "
            "primary resource for {assetName} becomes unavailable."
        ),
    ),
    Recommendation(
        title="Conduct Detailed Risk Assessment",
        description=(
            "Perform a more detailed risk assessment for {assetName} to identify "
            "specific vulnerabilities and mitigation strategies."
        ),
    ),
    Recommendation(
        title="Create Emergency Contact List",
        description=(
            "Develop an emergency contact list for {assetName} including all key "
            "stakeholders, vendors, and support resources."
        ),
    ),
)

MEDIUM_TERM_TEMPLATES: tuple[Recommendation, ...] = (
    Recommendation(
        title="Develop Redundancy Strategy",
        description=(
            "Design and implement a redundancy strategy for {assetName} to ensure "
            "business continuity in case of failure or loss."
        ),
    ),
    Recommendation(
        title="Identify Alternative Vendors/Partners",
        description=(
            "Research and establish relationships with alternative vendors or "
            "partners who could serve as backups for {assetName}."
        ),
    ),
    Recommendation(
        title="Create Successor Planning Program",
        description=(
            "Develop a formal successor planning program for key personnel "
            "associated with {assetName}."
        ),
    ),
    Recommendation(
        title="Distribute Responsibility",
        description=(
            "Reorganize responsibilities related to {assetName} to distribute "
            "knowledge and authority across multiple team members."
        ),
    ),
    Recommendation(
        title="Conduct Continuity Drills",
        description=(
            "Plan and execute continuity drills to test resilience without "
            "{assetName} and identify gaps in preparedness."
        ),
    ),
)

LONG_TERM_TEMPLATES: tuple[Recommendation, ...] = (
    Recommendation(
        title="Restructure Dependency Architecture",
        description=(
            "Fundamentally restructure how your organization depends on "
            "{assetName} to build greater resilience into your operational model."
        ),
    ),
    Recommendation(
        title="Strategic Diversification Plan",
        description=(
            "Develop a long-term diversification plan to reduce overall dependency "
            "on {assetCategory} resources like {assetName}."
        ),
    ),
    Recommendation(
        title="Automation and Digitization",
        description=(
            "Invest in automation and digitization to reduce dependency on "
            "individual resources and create more resilient systems around "
            "{assetName}."
        ),
    ),
    Recommendation(
        title="Implement Resilient Design Principles",
        description=(
            "Incorporate resilient design principles in all future developments "
            "related to {assetCategory} to avoid creating new critical dependencies."
        ),
    ),
    Recommendation(
        title="Foster Culture of Resilience",
        description=(
            "Develop training programs and incentives to foster a culture of "
            "resilience and preparedness across the organization."
        ),
    ),
)

TEMPLATES_BY_HORIZON: Mapping[Horizon, tuple[Recommendation, ...]] = MappingProxyType({
    Horizon.QUICK_WINS:  QUICK_WIN_TEMPLATES,
    Horizon.MEDIUM_TERM: MEDIUM_TERM_TEMPLATES,
    Horizon.LONG_TERM:   LONG_TERM_TEMPLATES,
})

# Industries without an entry contribute nothing.
INDUSTRY_RECOMMENDATIONS: Mapping[Industry, tuple[tuple[Horizon, Recommendation], ...]] = (
    MappingProxyType({
        Industry.SPORTS: (
            (
                Horizon.QUICK_WINS,
                Recommendation(
                    title="Implement Player Wellness Monitoring",
                    description=(
                        "Deploy player wellness tracking systems to identify early "
                        "warning signs of potential injury or performance issues "
                        "for key players."
                    ),
                ),
            ),
            (
                Horizon.MEDIUM_TERM,
                Recommendation(
                    title="Develop Bench Strength",
                    description=(
                        "Create a structured development program for bench players "
                        "to ensure they can effectively substitute for star players "
                        "when needed."
                    ),
                ),
            ),
            (
                Horizon.LONG_TERM,
                Recommendation(
                    title="Build Team-First Culture",
                    description=(
                        "Invest in building a team-first culture that can withstand "
                        "the loss of individual star players while maintaining "
                        "performance."
                    ),
                ),
            ),
        ),
        Industry.TECHNOLOGY: (
            (
                Horizon.QUICK_WINS,
                Recommendation(
                    title="Document System Architecture",
                    description=(
                        "Create comprehensive documentation of system architecture, "
                        "dependencies, and recovery procedures."
                    ),
                ),
            ),
            (
                Horizon.MEDIUM_TERM,
                Recommendation(
                    title="Implement Service Redundancy",
                    description=(
                        "Design and implement redundant services across multiple "
                        "availability zones or regions to eliminate single points "
                        "of failure."
                    ),
                ),
            ),
            (
                Horizon.LONG_TERM,
                Recommendation(
                    title="Adopt Microservices Architecture",
                    description=(
                        "Gradually migrate from monolithic systems to microservices "
                        "architecture to improve resilience and scalability."
                    ),
                ),
            ),
        ),
    })
)

DIVERSIFICATION_STRATEGY = Recommendation(
    title="Develop Formal Diversification Strategy",
    description=(
        "Create a comprehensive strategy to diversify dependencies across all "
        "critical categories."
    ),
)

DEFAULT_RECOMMENDATIONS: Mapping[Horizon, Recommendation] = MappingProxyType({
    Horizon.QUICK_WINS: Recommendation(
        title="Conduct Comprehensive Resilience Assessment",
        description=(
            "Perform a more detailed resilience assessment across all departments "
            "to identify additional vulnerabilities and opportunities for "
            "improvement."
        ),
    ),
    Horizon.MEDIUM_TERM: Recommendation(
        title="Develop Organization-Wide Resilience Policy",
        description=(
            "Create a formal resilience policy that establishes guidelines, "
            "responsibilities, and procedures for maintaining operational "
            "continuity."
        ),
    ),
    Horizon.LONG_TERM: Recommendation(
        title="Invest in Resilience Training",
        description=(
            "Develop a comprehensive training program to build resilience "
            "awareness and skills across all levels of the organization."
        ),
    ),
})
