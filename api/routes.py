"""
REST endpoints for session, capture, recommendations and quiz.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from pydantic import BaseModel, ConfigDict, Field

from moodverse.camera import CameraError, StillFrame, decode_image
from moodverse.capture import MoodAnalyzer
from moodverse.catalog import as_mood, categories, recommend
from moodverse.context import MoodVerseContext
from moodverse.quiz import QuizError

router = APIRouter()
logger = logging.getLogger(__name__)


class SignInRequest(BaseModel):
    email: str
    password: str


class SignUpRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str
    password: str
    name: str
    gender: str
    contact_number: str = Field(alias="contactNumber")


class AnswerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    option_index: int = Field(alias="optionIndex")


def get_context(request: Request) -> MoodVerseContext:
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        raise HTTPException(status_code=503, detail="Service not started")
    return ctx


def get_analyzer(ctx: MoodVerseContext = Depends(get_context)) -> MoodAnalyzer:
    if not ctx.session.authenticated or ctx.analyzer is None:
        raise HTTPException(status_code=401, detail="Sign in required")
    return ctx.analyzer


def _check_category(category: str) -> str:
    if category not in categories():
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    return category


# ---- session ----

@router.get("/session")
async def session_state(ctx: MoodVerseContext = Depends(get_context)):
    return ctx.session.snapshot().model_dump(mode="json")


@router.post("/auth/sign-in")
async def sign_in(body: SignInRequest, ctx: MoodVerseContext = Depends(get_context)):
    await ctx.session.sign_in(body.email, body.password)
    return ctx.session.snapshot().model_dump(mode="json")


@router.post("/auth/sign-up")
async def sign_up(body: SignUpRequest, ctx: MoodVerseContext = Depends(get_context)):
    await ctx.session.sign_up(body.email, body.password, body.name, body.gender, body.contact_number)
    return ctx.session.snapshot().model_dump(mode="json")


@router.post("/auth/sign-out")
async def sign_out(ctx: MoodVerseContext = Depends(get_context)):
    await ctx.session.sign_out()
    return ctx.session.snapshot().model_dump(mode="json")


# ---- capture ----

@router.get("/capture")
async def capture_state(analyzer: MoodAnalyzer = Depends(get_analyzer)):
    return analyzer.snapshot().model_dump(mode="json")


@router.post("/capture")
async def capture(
    file: Optional[UploadFile] = File(None),
    analyzer: MoodAnalyzer = Depends(get_analyzer),
):
    """
    Capture one still and analyze it.

    Args:
        file: Optional browser snapshot (JPEG/PNG). Without it the server camera is used.

    Returns:
        dict: Capture state after the attempt.
    """
    source = None
    if file is not None:
        logger.debug(f"[api] /capture upload filename={file.filename}")
        try:
            source = StillFrame(decode_image(await file.read()))
        except CameraError as e:
            raise HTTPException(status_code=400, detail=str(e))
    snap = await analyzer.capture(source)
    return snap.model_dump(mode="json")


@router.post("/capture/reset")
async def capture_reset(analyzer: MoodAnalyzer = Depends(get_analyzer)):
    return analyzer.reset().model_dump(mode="json")


# ---- recommendations ----

@router.get("/recommendations/{category}")
async def current_recommendations(category: str, analyzer: MoodAnalyzer = Depends(get_analyzer)):
    _check_category(category)
    items = analyzer.recommendations(category)
    return {
        "mood": analyzer.mood.value if analyzer.mood else None,
        "category": category,
        "items": [i.model_dump() for i in items],
    }


@router.get("/moods/{mood}/recommendations/{category}")
async def mood_recommendations(mood: str, category: str):
    _check_category(category)
    m = as_mood(mood)
    return {
        "mood": m.value if m else mood,
        "category": category,
        "items": [i.model_dump() for i in recommend(mood, category)],
    }


# ---- quiz ----

@router.post("/quiz")
async def quiz_start(analyzer: MoodAnalyzer = Depends(get_analyzer)):
    try:
        quiz = analyzer.start_quiz()
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return quiz.snapshot().model_dump(mode="json")


@router.get("/quiz")
async def quiz_state(analyzer: MoodAnalyzer = Depends(get_analyzer)):
    if analyzer.quiz is None:
        raise HTTPException(status_code=404, detail="No quiz in progress")
    return analyzer.quiz.snapshot().model_dump(mode="json")


@router.post("/quiz/answer")
async def quiz_answer(body: AnswerRequest, analyzer: MoodAnalyzer = Depends(get_analyzer)):
    if analyzer.quiz is None:
        raise HTTPException(status_code=404, detail="No quiz in progress")
    try:
        snap = analyzer.quiz.answer(body.option_index)
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return snap.model_dump(mode="json")


@router.get("/quiz/result")
async def quiz_result(analyzer: MoodAnalyzer = Depends(get_analyzer)):
    if analyzer.quiz is None:
        raise HTTPException(status_code=404, detail="No quiz in progress")
    try:
        res = analyzer.quiz.result()
    except QuizError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return res.model_dump(mode="json")
