from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
import structlog

from engine.errors import EmptyDirectoryError, MatchError, ValidationError
from schemas.schemas import (
    ErrorResponse,
    HealthCheckResponse,
    LoginRequest,
    LoginResponse,
    MatchRequest,
    MatchResponse,
    ProfileForm,
    ProfileResponse,
    TherapistListResponse,
)
from services import profile_capture
from services.matcher_service import run_matcher

log = structlog.get_logger()

router = APIRouter()


def error_response(status_code: int, message: str, info=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(status="error", message=message, info=info).model_dump(),
    )


def match_error_response(e: MatchError) -> JSONResponse:
    if isinstance(e, ValidationError):
        return error_response(422, e.message, info={"field": e.field})
    if isinstance(e, EmptyDirectoryError):
        return error_response(404, e.message)
    info = {"kind": type(e).__name__}
    if getattr(e, "status", None) is not None:
        info["upstream_status"] = e.status
    return error_response(502, e.message, info=info)


def request_validation_response(errors) -> JSONResponse:
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in errors]
    return error_response(422, "Invalid request.", info={"fields": fields})


def get_backend(request: Request):
    return request.app.state.backend


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


async def current_user(
    request: Request,
    x_device_id: Optional[str] = Header(default=None),
    authorization: Optional[str] = Header(default=None),
):
    backend = get_backend(request)
    return await backend.sessions.current(device_id=x_device_id, access_token=_bearer(authorization))


@router.get("/", response_model=HealthCheckResponse)
async def healthcheck(request: Request):
    settings = request.app.state.settings
    return HealthCheckResponse(
        status="ok",
        message="TherapistMatch live",
        version=settings.version,
        mode=settings.mode,
    )


@router.post("/auth/login", response_model=LoginResponse, responses={422: {"model": ErrorResponse}})
async def login(body: LoginRequest, request: Request, x_device_id: Optional[str] = Header(default=None)):
    backend = get_backend(request)

    if backend.mode == "demo":
        if not x_device_id:
            return error_response(422, "X-Device-Id header is required in demo mode.")
        session = await backend.sessions.login(body.email, x_device_id)
        return LoginResponse(status="success", message="Demo mode: Login successful!", session=session)

    try:
        await backend.sessions.login(body.email)
    except MatchError as e:
        return match_error_response(e)
    return LoginResponse(status="pending", message="Check your email for the login link.")


@router.post("/auth/logout")
async def logout(request: Request, x_device_id: Optional[str] = Header(default=None)):
    await get_backend(request).sessions.logout(x_device_id)
    return {"status": "success"}


@router.get("/profile", response_model=ProfileResponse, responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def get_profile(request: Request, user=Depends(current_user)):
    if user is None:
        return error_response(401, "Not logged in.")
    try:
        profile = await get_backend(request).profiles.fetch_profile(user.id)
    except MatchError as e:
        return match_error_response(e)
    if profile is None:
        return error_response(404, "No profile found.")
    return ProfileResponse(status="success", data=profile)


@router.put("/profile", response_model=ProfileResponse, responses={401: {"model": ErrorResponse}, 422: {"model": ErrorResponse}})
async def put_profile(form: ProfileForm, request: Request, user=Depends(current_user)):
    if user is None:
        return error_response(401, "Not logged in.")
    try:
        profile = await profile_capture.submit(form, user.id, get_backend(request).profiles)
    except MatchError as e:
        return match_error_response(e)
    return ProfileResponse(status="success", data=profile)


@router.get("/therapists", response_model=TherapistListResponse, responses={502: {"model": ErrorResponse}})
async def list_therapists(request: Request):
    try:
        therapists = await get_backend(request).directory.list_therapists()
    except MatchError as e:
        return match_error_response(e)
    return TherapistListResponse(status="success", data=therapists)


@router.post("/match", response_model=MatchResponse, responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}})
async def match(body: MatchRequest, request: Request, user=Depends(current_user)):
    if user is None:
        return error_response(401, "Not logged in.")

    backend = get_backend(request)
    results_store = request.app.state.match_results
    token = results_store.begin(user.id)

    try:
        profile = await backend.profiles.fetch_profile(user.id)
        if profile is None:
            return error_response(409, "Please complete your profile before requesting matches.")
        matches = await run_matcher(backend.matcher, profile, body.needs)
    except MatchError as e:
        return match_error_response(e)

    if not results_store.commit(user.id, token, matches):
        return error_response(409, "A newer match request superseded this one.", info={"request_token": token})

    return MatchResponse(status="success", mode=backend.mode, request_token=token, data=matches)


@router.get("/match/latest", response_model=MatchResponse, responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}})
async def latest_match(request: Request, user=Depends(current_user)):
    if user is None:
        return error_response(401, "Not logged in.")
    latest = request.app.state.match_results.latest(user.id)
    if latest is None:
        return error_response(404, "No matches yet.")
    token, matches = latest
    return MatchResponse(status="success", mode=get_backend(request).mode, request_token=token, data=matches)
