"""Static results returned whenever the model call or output parsing fails."""
from datetime import date
from typing import Optional

from ..schemas.analysis import (
    AdminInsightsResult,
    ComplaintSnapshot,
    FullAnalysisResult,
    PersonalReportResult,
    QuickTriageResult,
    ReportStats,
)

DEFAULT_CATEGORY = "General"
DEFAULT_LEVEL = "Medium"
DEFAULT_PRIORITY_SCORE = 50
SUMMARY_FALLBACK_CHARS = 100

QUICK_TRIAGE_FALLBACK = QuickTriageResult(
    category=DEFAULT_CATEGORY,
    priority=DEFAULT_LEVEL,
    suggested_image="",
    is_valid=False,
)

FULL_ANALYSIS_REASONS = ["Standard complaint"]
FULL_ANALYSIS_ASSIGNMENT = "General Support"
FULL_ANALYSIS_STATUS_EXPLANATION = "Your complaint has been received and will be reviewed shortly."


def full_analysis_fallback(description: str) -> FullAnalysisResult:
    return FullAnalysisResult(
        category=DEFAULT_CATEGORY,
        urgency=DEFAULT_LEVEL,
        priority_score=DEFAULT_PRIORITY_SCORE,
        priority_reason=list(FULL_ANALYSIS_REASONS),
        ai_summary=description[:SUMMARY_FALLBACK_CHARS],
        suggested_assignment=FULL_ANALYSIS_ASSIGNMENT,
        status_explanation=FULL_ANALYSIS_STATUS_EXPLANATION,
        detected_objects=[],
    )


STATUS_EXPLANATIONS = {
    "Pending": "Your complaint has been received and is waiting to be assigned to the appropriate team.",
    "In Progress": "Good news! Your complaint is being actively worked on by our team.",
    "Resolved": "Great news! Your complaint has been successfully resolved.",
    "Escalated": "Your complaint has been escalated to higher authorities for urgent attention.",
}
DEFAULT_STATUS_EXPLANATION = "Status update pending."


def status_explanation_fallback(status: str) -> str:
    return STATUS_EXPLANATIONS.get(status, DEFAULT_STATUS_EXPLANATION)


def email_fallback(complaint: ComplaintSnapshot, tone: str, today: Optional[date] = None) -> str:
    """Short templated email built straight from the snapshot."""
    category = complaint.category or DEFAULT_CATEGORY
    issue = (complaint.description or "Not specified")[:SUMMARY_FALLBACK_CHARS]
    if tone == "strict":
        return (
            f"Subject: URGENT - {category} Complaint\n\n"
            "Dear Sir/Madam,\n\n"
            f"Issue: {issue}\n\n"
            "Resolve within 24 hours or this will be escalated.\n\n"
            "Regards"
        )
    if tone == "friendly":
        return (
            "Subject: Quick Follow-up\n\n"
            "Hi Team!\n\n"
            f"Just checking on my {category} complaint. Any update?\n\n"
            "Thanks!"
        )
    today = today or date.today()
    return (
        f"REPORT: {category}\n"
        f"Status: {complaint.status or 'Unknown'}\n"
        f"Priority: {complaint.urgency or DEFAULT_LEVEL}\n"
        f"Issue: {issue}\n"
        f"Date: {today.isoformat()}"
    )


CHAT_FALLBACK = "I'm sorry, I'm having trouble connecting right now. Please try again later."

# Call failed vs. the model answered without a summary
REPORT_SUMMARY_FALLBACK = "Unable to generate report at this time."
REPORT_SUMMARY_MISSING = "No activity to report."


def personal_report_fallback(stats: ReportStats, summary: str = REPORT_SUMMARY_FALLBACK) -> PersonalReportResult:
    return PersonalReportResult(summary=summary, stats=stats, insights=[])


MOST_COMMON_ISSUE_FALLBACK = "General Issues"
HOTSPOT_FALLBACK = "Analysis pending"
TRENDS_FALLBACK = "Insufficient data"


def admin_insights_fallback(top_category: Optional[str]) -> AdminInsightsResult:
    return AdminInsightsResult(
        most_common_issue=top_category or MOST_COMMON_ISSUE_FALLBACK,
        hotspot_area=HOTSPOT_FALLBACK,
        trends=TRENDS_FALLBACK,
    )


REMINDER_FALLBACK = (
    "A polite reminder about your pending complaint. "
    "Please review at your earliest convenience."
)
