from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.schemas import AskRequest, AskResponse, Credentials, SessionResponse, SignalRequest
from config.settings import get_settings
from services.auth import AuthService
from services.conversation import ConversationService
from services.models import AuthError, EmailInUseError, Message, PredictSignalStrengthOutput
from services.signal import SignalPredictionService
from store.chat_history import ChatHistoryStore
from store.credentials import CredentialStore
from store.kv import open_store
from store.session import SessionStore


settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="[%(asctime)s] %(levelname)s - %(message)s",
)
logger = logging.getLogger("planassist")


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    kv = open_store(settings.storage_path)
    return AuthService(CredentialStore(kv), SessionStore(kv), latency_ms=settings.auth_latency_ms)


@lru_cache(maxsize=1)
def get_conversation_service() -> ConversationService:
    return ConversationService(ChatHistoryStore())


@lru_cache(maxsize=1)
def get_signal_service() -> SignalPredictionService:
    return SignalPredictionService()


@asynccontextmanager
async def lifespan(app: FastAPI):
    auth = app.dependency_overrides.get(get_auth_service, get_auth_service)()
    user = auth.restore_session()
    logger.info(
        "Startup: env=%s model=%s key_set=%s session_user=%s",
        settings.app_env,
        settings.gemini_model,
        bool(settings.google_api_key),
        user.email if user else None,
    )
    yield


app = FastAPI(title="Mobile Plan Assistant", version="1.0.0", lifespan=lifespan)

# CORS: allow local frontend during development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    status_code = 409 if isinstance(exc, EmailInUseError) else 401
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "error": exc.kind.value})


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.post("/auth/signup", response_model=SessionResponse)
def signup(req: Credentials, auth: AuthService = Depends(get_auth_service)) -> SessionResponse:
    return SessionResponse(user=auth.signup(req.email, req.password))


@app.post("/auth/login", response_model=SessionResponse)
def login(req: Credentials, auth: AuthService = Depends(get_auth_service)) -> SessionResponse:
    return SessionResponse(user=auth.login(req.email, req.password))


@app.post("/auth/logout", response_model=SessionResponse)
def logout(auth: AuthService = Depends(get_auth_service)) -> SessionResponse:
    auth.logout()
    return SessionResponse(user=None)


@app.get("/auth/session", response_model=SessionResponse)
def session(auth: AuthService = Depends(get_auth_service)) -> SessionResponse:
    return SessionResponse(user=auth.current_user, loading=auth.loading)


@app.post("/chat/ask", response_model=AskResponse)
def ask(req: AskRequest, conversations: ConversationService = Depends(get_conversation_service)) -> AskResponse:
    logger.info("Incoming question: user_id=%s query_len=%s", req.user_id, len(req.question))
    result = conversations.ask(req.question, req.user_id)
    if result.error:
        logger.warning("Question not answered: user_id=%s error=%s", req.user_id, result.error.value)
    return AskResponse(answer=result.text, error=result.error)


@app.get("/chat/history/{user_id}", response_model=List[Message])
def history(user_id: str, conversations: ConversationService = Depends(get_conversation_service)) -> List[Message]:
    return conversations.get_history(user_id)


@app.post("/signal/predict", response_model=PredictSignalStrengthOutput)
def predict(req: SignalRequest, signals: SignalPredictionService = Depends(get_signal_service)) -> PredictSignalStrengthOutput:
    logger.info("Incoming signal prediction: lat=%.5f lon=%.5f", req.latitude, req.longitude)
    return signals.predict(req.latitude, req.longitude)


@app.get("/health")
def health():
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
