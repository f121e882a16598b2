from __future__ import annotations

import asyncio
import logging
import os
import time
import uuid
from pathlib import Path

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from models import (
    ScreenCandidateRequest,
    ScreenCandidateResponse,
    RankCandidatesRequest,
    RankCandidatesResponse,
    AnalyzeJDRequest,
    Settings,
)
from screening import screen_candidate, rank_candidates
from screening.llm_validator import (
    analyze_job_description,
    build_jd_analysis_agent,
    build_validation_agent,
)
from screening.schemas import JobRequirements


# Load environment from working directory .env and the one beside this file
load_dotenv()
load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env", override=False)

logger = logging.getLogger(__name__)

app = FastAPI(title="Candidate Screening API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> Settings:
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_base_url=os.getenv("OPENAI_BASE_URL"),
        model_name=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        validate_with_llm=os.getenv("VALIDATE_WITH_LLM", "false").lower() in ("1", "true", "yes"),
        request_timeout_seconds=int(os.getenv("REQUEST_TIMEOUT_SECONDS", "60")),
    )


def make_request_id() -> str:
    return uuid.uuid4().hex[:12]


@app.get("/")
async def root():
    return {"status": "ok", "version": "1.0.0"}


@app.post("/api/screen-candidate", response_model=ScreenCandidateResponse)
async def screen_candidate_endpoint(
    request: ScreenCandidateRequest,
    settings: Settings = Depends(get_settings),
):
    if not request.resume or not request.resume.strip() or request.core_skills is None:
        raise HTTPException(status_code=400, detail="Missing resume or JD data")

    request_id = make_request_id()
    started = time.time()

    validate = settings.validate_with_llm if request.validate_with_llm is None else request.validate_with_llm
    agent = None
    if validate:
        if settings.openai_api_key:
            agent = build_validation_agent(
                settings.model_name,
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
            )
        else:
            logger.warning(f"[{request_id}] OPENAI_API_KEY not set, skipping LLM validation")
            validate = False

    requirements = JobRequirements(
        core_skills=request.core_skills,
        behavioral_traits=request.behavioral_traits,
        competency_level=request.competency_level,
    )

    try:
        report = await asyncio.wait_for(
            asyncio.to_thread(
                screen_candidate,
                request.resume,
                request.core_skills,
                requirements=requirements,
                validate=validate,
                agent=agent,
            ),
            timeout=settings.request_timeout_seconds,
        )
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Screening timed out")
    except Exception as e:
        logger.error(f"[{request_id}] Candidate screening error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to screen candidate: {str(e)}")

    return ScreenCandidateResponse(
        request_id=request_id,
        report=report,
        processing_time=f"{time.time() - started:.2f}s",
    )


@app.post("/api/rank-candidates", response_model=RankCandidatesResponse)
async def rank_candidates_endpoint(request: RankCandidatesRequest):
    ranked = rank_candidates((c.id, c.scoring_result) for c in request.candidates)
    return RankCandidatesResponse(ranked=ranked)


@app.post("/api/analyze-jd", response_model=JobRequirements)
async def analyze_jd_endpoint(
    request: AnalyzeJDRequest,
    settings: Settings = Depends(get_settings),
):
    if not request.jd or not request.jd.strip():
        raise HTTPException(status_code=400, detail="Invalid job description")
    if not settings.openai_api_key:
        raise HTTPException(status_code=503, detail="OPENAI_API_KEY is not configured")

    agent = build_jd_analysis_agent(
        settings.model_name,
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(analyze_job_description, request.jd, agent=agent),
            timeout=settings.request_timeout_seconds,
        )
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Job description analysis timed out")
    except ValueError as e:
        logger.error(f"Job description analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=502, detail=f"Failed to analyze job description: {str(e)}")
