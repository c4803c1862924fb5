from contextlib import asynccontextmanager
from typing import Dict

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import logger, get_settings, configure_logging
from exceptions import AnalysisError, ErrorCategory
from middleware.context import RequestContextMiddleware, get_request_id
from models import ErrorResponse, VerifyRequest, VerifyResponse
from services import FactCheckService, create_fact_check_service

STATUS_BY_CATEGORY: Dict[ErrorCategory, int] = {
    ErrorCategory.CONFIGURATION: 500,
    ErrorCategory.AUTHENTICATION: 502,
    ErrorCategory.AUTHORIZATION: 502,
    ErrorCategory.RATE_LIMIT: 429,
    ErrorCategory.TRANSPORT: 503,
    ErrorCategory.MALFORMED_RESPONSE: 502,
    ErrorCategory.INVALID_VERDICT: 502,
    ErrorCategory.UNKNOWN: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings)

    app.state.fact_check_service = None
    app.state.startup_error = None
    try:
        app.state.fact_check_service = create_fact_check_service(settings)
    except AnalysisError as e:
        logger.critical("Fact-check service unavailable: %s", e.message)
        app.state.startup_error = e.with_traceback(None)
    yield


app = FastAPI(title="Fact Check AI", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)


def get_fact_check_service(request: Request) -> FactCheckService:
    service = getattr(request.app.state, "fact_check_service", None)
    if service is None:
        err = getattr(request.app.state, "startup_error", None)
        if err is None:
            raise AnalysisError(ErrorCategory.CONFIGURATION)
        raise AnalysisError(err.category, err.message, dict(err.details))
    return service


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    body = ErrorResponse(**exc.to_dict(), request_id=get_request_id())
    return JSONResponse(status_code=STATUS_BY_CATEGORY[exc.category], content=body.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request.") if errors else "Invalid request."
    # pydantic prefixes messages raised from validators
    message = message.removeprefix("Value error, ")
    body = ErrorResponse(
        error="ValidationException",
        message=message,
        details={"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        request_id=get_request_id(),
    )
    return JSONResponse(status_code=400, content=body.model_dump())


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "Fact Check AI is running."}


@app.post("/verify", response_model=VerifyResponse)
async def verify(payload: VerifyRequest, service: FactCheckService = Depends(get_fact_check_service)):
    logger.info("Verifying claim: %s", payload.claim[:80])
    result = await service.analyze_claim(payload.claim)
    return VerifyResponse.from_result(payload.claim, result)
