from langchain_core.prompts import PromptTemplate

from ..schemas.analysis import GenerationConfig, Operation

# Fixed per call; callers cannot tune these
TRIAGE_GENERATION = GenerationConfig(temperature=0.2, max_output_tokens=256)
ANALYSIS_GENERATION = GenerationConfig(temperature=0.4, max_output_tokens=1024)
TEXT_GENERATION = GenerationConfig(temperature=0.7, max_output_tokens=512)
INSIGHTS_GENERATION = GenerationConfig(temperature=0.5, max_output_tokens=512)

TRIAGE_CATEGORIES = (
    "Plumbing, Electrical, Infrastructure, Cleanliness, Security, IT/Network, "
    "Food, Transportation, Other"
)
ANALYSIS_CATEGORIES = (
    "Plumbing, Electrical, Infrastructure, Cleanliness, Security, IT/Network, "
    "Food, Transportation, Hostel, Academic, Other"
)

quick_triage_prompt = PromptTemplate.from_template(
    "Analyze this complaint text and provide quick categorization.\n"
    "Text: \"{text}\"\n\n"
    "First check if this is a VALID complaint (meaningful text about an issue).\n"
    "If it is gibberish, random characters, test text, or not a real complaint, set isValid to false.\n\n"
    "Respond in JSON format only:\n"
    "{{\n"
    "  \"category\": \"one of: {categories}\",\n"
    "  \"priority\": \"one of: Low, Medium, High, Critical\",\n"
    "  \"suggestedImage\": \"brief suggestion for what photo would help, or empty string if not needed\",\n"
    "  \"isValid\": true or false\n"
    "}}"
)

full_analyze_prompt = PromptTemplate.from_template(
    "You are an AI complaint analyzer for a college/society complaint management system.\n\n"
    "Analyze this complaint:\n"
    "Description: \"{description}\"\n"
    "{image_line}\n\n"
    "Provide a comprehensive analysis in JSON format:\n"
    "{{\n"
    "  \"category\": \"one of: {categories}\",\n"
    "  \"urgency\": \"one of: Low, Medium, High, Critical\",\n"
    "  \"priorityScore\": integer between 0-100 based on urgency, impact, and safety concerns,\n"
    "  \"priorityReason\": [\"array of 2-3 short reasons for the priority score\"],\n"
    "  \"aiSummary\": \"A brief 1-2 sentence summary of the complaint\",\n"
    "  \"suggestedAssignment\": \"suggested department or role: Maintenance Staff, Electrician, "
    "Housekeeping, Security, IT Support, Admin Office, etc.\",\n"
    "  \"statusExplanation\": \"A reassuring message explaining what will happen next, in friendly tone\",\n"
    "  \"detectedObjects\": [{{\"label\": \"string\", \"confidence\": number 0-100}}]\n"
    "}}\n"
    "Only include detectedObjects if an image was provided.\n\n"
    "Consider these factors for priority:\n"
    "- Safety hazards = very high priority\n"
    "- Water/electricity issues = high priority\n"
    "- Multiple people affected = higher priority\n"
    "- Urgent language = higher priority\n"
    "- Repeated issues = higher priority"
)

status_explain_prompt = PromptTemplate.from_template(
    "Generate a friendly, reassuring explanation for a complaint status update.\n\n"
    "Complaint: \"{description}\"\n"
    "Category: {category}\n"
    "New Status: {status}\n\n"
    "Write a 2-3 sentence explanation that:\n"
    "- Is warm and reassuring\n"
    "- Explains what this status means\n"
    "- Sets appropriate expectations\n"
    "- Uses simple language\n\n"
    "Respond with just the explanation text, no JSON."
)

EMAIL_TONES = {
    "strict": "formal and firm, emphasizing urgency and accountability",
    "friendly": "polite and gentle, serving as a friendly reminder",
    "report": "professional and factual, suitable for official documentation",
}
DEFAULT_EMAIL_TONE = "professional"

generate_email_prompt = PromptTemplate.from_template(
    "Generate an email draft for a complaint that is {tone}.\n\n"
    "Complaint Details:\n"
    "- Category: {category}\n"
    "- Priority: {urgency}\n"
    "- Description: {description}\n"
    "- Status: {status}\n\n"
    "Write a complete email with Subject line, greeting, body, and signature.\n"
    "The email should be addressed to the relevant authority."
)

user_chat_prompt = PromptTemplate.from_template(
    "You are a helpful AI assistant for a complaint management system.\n\n"
    "User's complaints:\n"
    "{complaints_context}\n\n"
    "User asks: \"{query}\"\n\n"
    "Provide a helpful, friendly response about their complaints, status, or general "
    "questions about the system.\n"
    "Keep the response concise (2-4 sentences max).\n"
    "If you don't have information, politely say so."
)

personal_report_prompt = PromptTemplate.from_template(
    "Generate a brief monthly report summary for a user.\n\n"
    "Stats:\n"
    "- Total complaints: {total}\n"
    "- Resolved: {resolved}\n"
    "- Pending: {pending}\n"
    "- In Progress: {in_progress}\n\n"
    "Provide a friendly 2-3 sentence summary and insights.\n"
    "Respond in JSON format:\n"
    "{{\n"
    "  \"summary\": \"Your monthly summary text\",\n"
    "  \"insights\": [\"insight 1\", \"insight 2\"]\n"
    "}}"
)

admin_insights_prompt = PromptTemplate.from_template(
    "Based on complaint data, provide brief admin insights.\n\n"
    "Data:\n"
    "- Total complaints: {total}\n"
    "- Top category: {top_name} ({top_count} complaints)\n"
    "- Pending: {pending}\n"
    "- Categories: {breakdown}\n\n"
    "Respond in JSON:\n"
    "{{\n"
    "  \"mostCommonIssue\": \"brief description\",\n"
    "  \"hotspotArea\": \"area or department with most issues\",\n"
    "  \"trends\": \"brief trend observation\"\n"
    "}}"
)

generate_reminder_prompt = PromptTemplate.from_template(
    "Generate a polite follow-up reminder for an unresolved complaint.\n\n"
    "Complaint: {category} - {excerpt}\n"
    "Days pending: approximately {days} days\n\n"
    "Write a short, polite reminder (2-3 sentences) requesting status update."
)

SYSTEM_INSTRUCTIONS = {
    Operation.QUICK_TRIAGE: "You are a complaint analyzer. Analyze the text and respond ONLY with valid JSON, no other text.",
    Operation.FULL_ANALYZE: (
        "You are an AI complaint analyzer for a college/society complaint management system. "
        "Analyze complaints and respond ONLY with valid JSON."
    ),
    Operation.STATUS_EXPLAIN: "You are a friendly customer support assistant. Write warm, reassuring messages.",
    Operation.USER_CHAT: (
        "You are a helpful AI assistant for a complaint management system. Be friendly and concise."
    ),
    Operation.PERSONAL_REPORT: "You are a report generator. Respond ONLY with valid JSON.",
    Operation.ADMIN_INSIGHTS: "You are an admin analytics assistant. Respond ONLY with valid JSON.",
    Operation.GENERATE_REMINDER: "You are a polite reminder assistant. Write brief, professional reminders.",
}

# generate-email picks its instruction by tone
EMAIL_SYSTEM_INSTRUCTIONS = {
    "strict": "Write very short, firm emails. Max 5 lines.",
    "friendly": "Write very short, friendly reminder emails. Max 5 lines.",
    "report": "Write brief, factual reports. Max 8 lines.",
}
