import logging
from typing import Any, Awaitable, Callable, Dict, Optional

from ..schemas.analysis import (
    AdminInsightsRequest,
    AdminInsightsResult,
    ChatResult,
    EmailResult,
    FullAnalysisResult,
    FullAnalyzeRequest,
    GenerateEmailRequest,
    GenerateReminderRequest,
    GenerationConfig,
    Operation,
    PersonalReportRequest,
    PersonalReportResult,
    QuickTriageRequest,
    QuickTriageResult,
    ReminderResult,
    StatusExplainRequest,
    StatusExplanationResult,
    UserChatRequest,
)
from . import fallbacks, prompts
from .upstream import UpstreamError, generate
from .utils import (
    category_counts,
    complaint_stats,
    count_status,
    days_pending,
    extract_json,
    merge_with_fallback,
    snapshot_excerpt,
    top_category,
)

logger = logging.getLogger(__name__)

Handler = Callable[[Dict[str, Any], str], Awaitable[Dict[str, Any]]]

CHAT_CONTEXT_LIMIT = 5
MIN_EMAIL_CHARS = 50


async def ask_text(
    operation: Operation,
    prompt: str,
    api_key: str,
    generation: GenerationConfig,
    system_instruction: Optional[str] = None,
) -> Optional[str]:
    """Plain-text reply, or None when the call fails or comes back blank."""
    instruction = system_instruction or prompts.SYSTEM_INSTRUCTIONS.get(operation)
    try:
        reply = await generate(prompt, api_key, generation, instruction)
    except UpstreamError as exc:
        logger.warning("%s: upstream failed (%s), using fallback", operation.value, exc)
        return None
    return reply.strip() or None


async def ask_json(operation: Operation, prompt: str, api_key: str, generation: GenerationConfig) -> Optional[Dict[str, Any]]:
    """Structured reply, or None for any upstream or parse failure."""
    reply = await ask_text(operation, prompt, api_key, generation)
    if reply is None:
        return None
    parsed = extract_json(reply)
    if parsed is None:
        logger.warning("%s: no JSON object in model reply, using fallback", operation.value)
    return parsed


async def quick_triage(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = QuickTriageRequest.model_validate(body)
    prompt = prompts.quick_triage_prompt.format(text=req.text, categories=prompts.TRIAGE_CATEGORIES)
    parsed = await ask_json(Operation.QUICK_TRIAGE, prompt, api_key, prompts.TRIAGE_GENERATION)
    result = merge_with_fallback(QuickTriageResult, parsed, fallbacks.QUICK_TRIAGE_FALLBACK)
    return result.model_dump(by_alias=True)


async def full_analyze(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = FullAnalyzeRequest.model_validate(body)
    image_line = f"Image URL: {req.image_url}" if req.image_url else "No image attached"
    prompt = prompts.full_analyze_prompt.format(
        description=req.description,
        image_line=image_line,
        categories=prompts.ANALYSIS_CATEGORIES,
    )
    parsed = await ask_json(Operation.FULL_ANALYZE, prompt, api_key, prompts.ANALYSIS_GENERATION)
    fallback = fallbacks.full_analysis_fallback(req.description)
    result = merge_with_fallback(FullAnalysisResult, parsed, fallback)
    return result.model_dump(by_alias=True)


async def status_explain(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = StatusExplainRequest.model_validate(body)
    complaint = req.complaint
    prompt = prompts.status_explain_prompt.format(
        description=(complaint.description or "")[:200] or "General complaint",
        category=complaint.category or fallbacks.DEFAULT_CATEGORY,
        status=req.status,
    )
    reply = await ask_text(Operation.STATUS_EXPLAIN, prompt, api_key, prompts.TEXT_GENERATION)
    explanation = reply or fallbacks.status_explanation_fallback(req.status)
    return StatusExplanationResult(explanation=explanation).model_dump(by_alias=True)


async def generate_email(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = GenerateEmailRequest.model_validate(body)
    complaint = req.complaint
    prompt = prompts.generate_email_prompt.format(
        tone=prompts.EMAIL_TONES.get(req.type, prompts.DEFAULT_EMAIL_TONE),
        category=complaint.category or fallbacks.DEFAULT_CATEGORY,
        urgency=complaint.urgency or fallbacks.DEFAULT_LEVEL,
        description=complaint.description or "Not specified",
        status=complaint.status or "Unknown",
    )
    reply = await ask_text(
        Operation.GENERATE_EMAIL,
        prompt,
        api_key,
        prompts.TEXT_GENERATION,
        prompts.EMAIL_SYSTEM_INSTRUCTIONS.get(req.type, prompts.EMAIL_SYSTEM_INSTRUCTIONS["report"]),
    )
    if reply is not None and len(reply) <= MIN_EMAIL_CHARS:
        logger.warning("%s: reply too short for an email, using fallback", Operation.GENERATE_EMAIL.value)
        reply = None
    email = reply or fallbacks.email_fallback(complaint, req.type)
    return EmailResult(email=email).model_dump(by_alias=True)


async def user_chat(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = UserChatRequest.model_validate(body)
    lines = [
        f"- {c.category or fallbacks.DEFAULT_CATEGORY}: {c.status or 'Unknown'} ({snapshot_excerpt(c, 50)})"
        for c in req.complaints[:CHAT_CONTEXT_LIMIT]
    ]
    prompt = prompts.user_chat_prompt.format(
        complaints_context="\n".join(lines) or "No complaints",
        query=req.query,
    )
    reply = await ask_text(Operation.USER_CHAT, prompt, api_key, prompts.TEXT_GENERATION)
    return ChatResult(response=reply or fallbacks.CHAT_FALLBACK).model_dump(by_alias=True)


async def personal_report(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = PersonalReportRequest.model_validate(body)
    # Counts are ours; the model only writes prose around them
    stats = complaint_stats(req.complaints)
    prompt = prompts.personal_report_prompt.format(
        total=stats.total,
        resolved=stats.resolved,
        pending=stats.pending,
        in_progress=stats.in_progress,
    )
    parsed = await ask_json(Operation.PERSONAL_REPORT, prompt, api_key, prompts.INSIGHTS_GENERATION)
    fallback = fallbacks.personal_report_fallback(stats)
    if parsed is not None:
        parsed.pop("stats", None)
        fallback = fallbacks.personal_report_fallback(stats, fallbacks.REPORT_SUMMARY_MISSING)
    result = merge_with_fallback(PersonalReportResult, parsed, fallback)
    return result.model_dump(by_alias=True)


async def admin_insights(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = AdminInsightsRequest.model_validate(body)
    top = top_category(req.complaints)
    breakdown = ", ".join(f"{name}: {count}" for name, count in category_counts(req.complaints).items())
    prompt = prompts.admin_insights_prompt.format(
        total=len(req.complaints),
        top_name=top[0] if top else "N/A",
        top_count=top[1] if top else 0,
        pending=count_status(req.complaints, "Pending"),
        breakdown=breakdown or "none",
    )
    parsed = await ask_json(Operation.ADMIN_INSIGHTS, prompt, api_key, prompts.INSIGHTS_GENERATION)
    fallback = fallbacks.admin_insights_fallback(top[0] if top else None)
    result = merge_with_fallback(AdminInsightsResult, parsed, fallback)
    return result.model_dump(by_alias=True)


async def generate_reminder(body: Dict[str, Any], api_key: str) -> Dict[str, Any]:
    req = GenerateReminderRequest.model_validate(body)
    complaint = req.complaint
    prompt = prompts.generate_reminder_prompt.format(
        category=complaint.category or fallbacks.DEFAULT_CATEGORY,
        excerpt=snapshot_excerpt(complaint, 100) or "No description",
        days=days_pending(complaint.created_at),
    )
    reply = await ask_text(Operation.GENERATE_REMINDER, prompt, api_key, prompts.TEXT_GENERATION)
    return ReminderResult(reminder=reply or fallbacks.REMINDER_FALLBACK).model_dump(by_alias=True)


HANDLERS: Dict[Operation, Handler] = {
    Operation.QUICK_TRIAGE: quick_triage,
    Operation.FULL_ANALYZE: full_analyze,
    Operation.STATUS_EXPLAIN: status_explain,
    Operation.GENERATE_EMAIL: generate_email,
    Operation.USER_CHAT: user_chat,
    Operation.PERSONAL_REPORT: personal_report,
    Operation.ADMIN_INSIGHTS: admin_insights,
    Operation.GENERATE_REMINDER: generate_reminder,
}

_unhandled = [op.value for op in Operation if op not in HANDLERS]
if _unhandled:
    raise RuntimeError(f"No handler registered for: {', '.join(_unhandled)}")
