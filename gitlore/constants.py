EXTENSION_KEY_HEADER = "x-gitlore-extension-key"
CORS_ALLOW_METHODS = ["POST", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Content-Type", EXTENSION_KEY_HEADER]

MAX_FUNCTION_CODE_CHARS = 5000
MAX_SEARCH_CONTEXT_CHARS = 5000
MAX_SUMMARY_FILE_CHARS = 8000
MAX_ECHOED_FILE_CHARS = 16000
TRUNCATION_MARKER = "\n// … truncated"

IMPACT_MAX_TOKENS = 150
NARRATE_MAX_TOKENS = 1000
RISK_MAX_TOKENS = 1000
SEARCH_MAX_TOKENS = 200

RISK_INVALID_FORMAT_REASON = "AI returned invalid format. Check server logs."
SEARCH_OVERLOAD_ANSWER = "System Overload. Try again."
FILE_SUMMARY_FALLBACK = (
    "Repo Narrator could not parse a structured response, but this file "
    "participates in the repository's behavior as shown in the code."
)

IMPACT_PROMPT = """Analyze this code snippet. Identify specific risks: PII, Auth, External APIs, or Database Writes. Return a JSON object with: riskLabel (string), riskColor (hex string), summary (string). Keep it concise.

```
{code}
```

Return only valid JSON, no markdown formatting."""

NARRATE_PROMPT = """You are an expert code narrator. Summarize this file. Use the following format strictly: <br>• <b>Purpose:</b> [One sentence]<br>• <b>Key Components:</b> [List main functions/classes]<br>• <b>Architecture:</b> [How it fits the system]. Keep it concise.

File: {path}

```
{content}
```"""

RISK_PROMPT = """You are a senior code auditor. Analyze the following function.
Return a JSON object with this exact structure: {{ "score": number, "reason": "string" }}.
Score is 1-10 (10 is high risk). Keep reason under 20 words.
Do NOT use Markdown blocks. Just raw JSON.

Code:
```
{code}
```"""

SEARCH_PROMPT = """You are the GitLore Hologram AI.
Answer using ONLY the provided code context.
Keep it under 2 sentences.
Do NOT use Markdown. Return plain text only.

Context:
{context}

Question: {query}"""

FILE_SUMMARY_PROMPT = """You are Repo Narrator, a senior engineer explaining one file in a codebase.
Given the file content, produce a short JSON description with:
1) "summary": detailed markdown with headings and bullet points. Include sections like "Overview", "Key responsibilities", "Important flows", "External dependencies", and "Potential risks / edge cases" where applicable.
2) "mermaid": optional Mermaid JS sequence or flow diagram capturing the main flow (or empty string if not helpful).

Return ONLY JSON with shape:
{{ "summary": string, "mermaid": string }}

File path: {path}

File content:
{content}"""
