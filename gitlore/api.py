import logging
from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

import gitlore.constants as constants
import gitlore.prompts as prompts
from gitlore.auth import AccessGate
from gitlore.config import Settings
from gitlore.dependencies import get_github_client, get_model_client, get_settings
from gitlore.errors import AccessDenied
from gitlore.github import GitHubClient
from gitlore.llm import ModelClient
from gitlore.normalizer import normalize
from gitlore.schemas import (
    ChatConfig,
    FileSummary,
    FileSummaryRequest,
    FileSummaryResponse,
    ImpactAssessment,
    ImpactFields,
    ImpactRequest,
    NarrateRequest,
    RiskAssessment,
    SearchRequest,
)
from gitlore.scoring import calculate_complexity_score

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize Limiter
limiter = Limiter(key_func=get_remote_address)

ALLOW_ANY_ORIGIN = {"Access-Control-Allow-Origin": "*"}

app = FastAPI(
    title="GitLore API",
    description="Code narration, risk and impact analysis for the GitLore extension and web UI.",
    version="1.0.0",
)

# Register Limiter
app.state.limiter = limiter
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=constants.CORS_ALLOW_METHODS,
    allow_headers=constants.CORS_ALLOW_HEADERS,
)


@app.exception_handler(AccessDenied)
async def access_denied_handler(request: Request, exc: AccessDenied):
    return exc.response


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Keep the soft-fail contracts of risk and search when a client is throttled."""
    logging.warning(f"Rate limit exceeded for {request.url.path}: {exc.detail}")
    if request.url.path == "/api/extension/risk":
        return JSONResponse({"score": 0, "reason": "Rate limit exceeded."})
    if request.url.path == "/api/extension/search":
        return JSONResponse(
            {"answer": constants.SEARCH_OVERLOAD_ANSWER},
            status_code=429,
            headers=ALLOW_ANY_ORIGIN,
        )
    return _rate_limit_exceeded_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    logging.warning(f"Invalid request body for {request.url.path}: {fields}")
    return JSONResponse({"error": "Invalid request body"}, status_code=400)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def internal_error(label: str, e: Exception) -> JSONResponse:
    message = str(e)
    logging.error(f"{label} endpoint error: {message}")
    return error_response(message or "Internal server error", 500)


extension_gate = AccessGate(lambda: error_response("Unauthorized", 401))
risk_gate = AccessGate(lambda: JSONResponse({"score": 0, "reason": "Unauthorized access."}))
search_gate = AccessGate(
    lambda: JSONResponse({"answer": "Auth Failed"}, status_code=401, headers=ALLOW_ANY_ORIGIN)
)


def impact_fallback(raw: str) -> ImpactFields:
    return ImpactFields(riskLabel="Unknown", riskColor="#888888", summary=raw)


def risk_fallback(raw: str) -> RiskAssessment:
    return RiskAssessment(score=5, reason=constants.RISK_INVALID_FORMAT_REASON)


def file_summary_fallback(raw: str) -> FileSummary:
    return FileSummary(summary=constants.FILE_SUMMARY_FALLBACK, mermaid="")


@app.get("/health", tags=["Status"])
async def health(settings: Annotated[Settings, Depends(get_settings)]):
    return {"status": "ok", "provider": settings.LLM_PROVIDER}


# ============ Extension Endpoints ============

@app.post("/api/extension/impact", tags=["Extension"], dependencies=[Depends(extension_gate)])
@limiter.limit(settings.RATE_LIMIT)
async def analyze_impact(
    request: Request,
    request_data: ImpactRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    model_client: Annotated[ModelClient, Depends(get_model_client)],
):
    """Label the risks in a code snippet and attach a deterministic complexity score."""
    code_snippet = request_data.codeSnippet
    if not code_snippet:
        return error_response("Missing codeSnippet", 400)

    try:
        complexity_score = calculate_complexity_score(code_snippet)

        completion = await model_client.chat(
            prompts.build_impact_messages(code_snippet),
            ChatConfig(model=settings.MODEL_NAME, maxTokens=constants.IMPACT_MAX_TOKENS),
        )
        fields = normalize(completion.content, ImpactFields, impact_fallback)

        return ImpactAssessment(**fields.model_dump(), score=complexity_score)
    except Exception as e:
        return internal_error("Impact", e)


@app.post("/api/extension/narrate", tags=["Extension"], dependencies=[Depends(extension_gate)])
@limiter.limit(settings.RATE_LIMIT)
async def narrate_file(
    request: Request,
    request_data: NarrateRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    model_client: Annotated[ModelClient, Depends(get_model_client)],
):
    """Summarize a whole file as a short HTML-formatted narration."""
    file_content = request_data.fileContent
    logging.info(
        f"Narrate request: {request_data.filePath} length: {len(file_content) if file_content else 0}"
    )

    if not file_content:
        return error_response("Missing fileContent", 400)

    try:
        completion = await model_client.chat(
            prompts.build_narrate_messages(file_content, request_data.filePath),
            ChatConfig(model=settings.MODEL_NAME, maxTokens=constants.NARRATE_MAX_TOKENS),
        )
        logging.debug(f"Narrate model response: {completion.content}")

        return {"summary": completion.content}
    except Exception as e:
        return internal_error("Narrate", e)


@app.post("/api/extension/risk", tags=["Extension"], dependencies=[Depends(risk_gate)])
@limiter.limit(settings.RATE_LIMIT)
async def analyze_risk(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    model_client: Annotated[ModelClient, Depends(get_model_client)],
):
    """
    Score a single function from 1 to 10 for security and correctness risk.

    Always answers 200 with a `{score, reason}` body so the extension never
    has to handle an error status. A score of 0 marks a failed request.
    """
    logging.info("Risk analysis request started")

    try:
        try:
            body = await request.json()
        except ValueError as e:
            logging.error(f"Risk request body parse error: {e}")
            return {"score": 0, "reason": "Invalid request body."}

        function_code = body.get("functionCode") if isinstance(body, dict) else None
        if not function_code or not isinstance(function_code, str):
            logging.info("Risk request without function code")
            return {"score": 0, "reason": "No code selected."}

        messages = prompts.build_risk_messages(function_code)

        try:
            completion = await model_client.chat(
                messages,
                ChatConfig(model=settings.MODEL_NAME, maxTokens=constants.RISK_MAX_TOKENS),
            )
        except Exception as e:
            logging.error(f"Risk model call error: {e}")
            return {"score": 0, "reason": f"AI service error: {str(e) or 'Unknown error'}"}

        logging.debug(f"Risk model response: {completion.content}")
        assessment = normalize(completion.content, RiskAssessment, risk_fallback)

        logging.info("Risk analysis finished")
        return assessment.model_dump()
    except Exception as e:
        logging.exception("Risk analysis failed")
        return {"score": 0, "reason": f"Server Error: {str(e) or 'Unknown error'}"}


@app.options("/api/extension/search", tags=["Extension"])
async def search_preflight():
    return Response(
        status_code=200,
        headers={
            **ALLOW_ANY_ORIGIN,
            "Access-Control-Allow-Methods": ", ".join(constants.CORS_ALLOW_METHODS),
            "Access-Control-Allow-Headers": ", ".join(constants.CORS_ALLOW_HEADERS),
        },
    )


@app.post("/api/extension/search", tags=["Extension"], dependencies=[Depends(search_gate)])
@limiter.limit(settings.RATE_LIMIT)
async def search_code(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    model_client: Annotated[ModelClient, Depends(get_model_client)],
):
    """Answer a short question about the code context sent by the extension."""
    try:
        request_data = SearchRequest.model_validate(await request.json())
        if not request_data.query:
            return JSONResponse({"answer": "Ask something."}, headers=ALLOW_ANY_ORIGIN)

        completion = await model_client.chat(
            prompts.build_search_messages(request_data.query, request_data.context),
            ChatConfig(model=settings.MODEL_NAME, maxTokens=constants.SEARCH_MAX_TOKENS),
        )

        return JSONResponse({"answer": completion.content.strip()}, headers=ALLOW_ANY_ORIGIN)
    except Exception as e:
        logging.error(f"Search endpoint error: {e}")
        return JSONResponse(
            {"answer": constants.SEARCH_OVERLOAD_ANSWER},
            status_code=500,
            headers=ALLOW_ANY_ORIGIN,
        )


# ============ Web UI Endpoints ============

@app.post("/api/file-summary", tags=["Repo Narrator"])
@limiter.limit(settings.RATE_LIMIT)
async def summarize_file(
    request: Request,
    request_data: FileSummaryRequest,
    settings: Annotated[Settings, Depends(get_settings)],
    model_client: Annotated[ModelClient, Depends(get_model_client)],
    github_client: Annotated[GitHubClient, Depends(get_github_client)],
):
    """Fetch a file from GitHub and describe it as markdown plus an optional Mermaid diagram."""
    owner, name, path = request_data.owner, request_data.name, request_data.path
    if not (owner and name and path):
        return error_response("Missing owner, name, or path", 400)

    try:
        file_content = await run_in_threadpool(github_client.fetch_raw_file, owner, name, path)
    except Exception as e:
        logging.error(f"File summary fetch error for {owner}/{name}/{path}: {e}")
        return error_response("Failed to fetch file content from GitHub.", 400)

    try:
        completion = await model_client.chat(
            prompts.build_file_summary_messages(file_content, path),
            ChatConfig(model=settings.MODEL_NAME, maxTokens=settings.DEFAULT_MAX_TOKENS),
        )
    except Exception as e:
        return internal_error("File summary", e)

    parsed = normalize(completion.content, FileSummary, file_summary_fallback)

    return FileSummaryResponse(
        path=path,
        code=prompts.echo_file_content(file_content),
        summary=parsed.summary,
        mermaid=parsed.mermaid,
    )
