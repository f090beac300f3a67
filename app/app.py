import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from app import config
from naming.domains import DomainChecker
from naming.exceptions import ConfigurationError, NamingError, ValidationError
from naming.llm_service import LLMService
from naming.pipeline import NamingPipeline


CONFIG = config.Config()


logging.basicConfig(level=CONFIG.log_level)
logger = logging.getLogger(__name__)


JSONBody = dict[str, Any]


def aJSONResponse(route: Callable[..., Awaitable[JSONBody | tuple[JSONBody, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            body, code = resp, 200
        else:
            body, code = resp
        return JSONResponse(body, status_code=code)

    return wrapper


async def json_body(request: Request) -> JSONBody:
    try:
        body = await request.json()
    except ValueError as e:
        raise ValidationError("Invalid JSON body") from e
    # A non-object body carries no fields.
    return body if isinstance(body, dict) else {}


def text_field(body: JSONBody, key: str) -> str:
    value = body.get(key)
    return value if isinstance(value, str) else ""


@aJSONResponse
async def check_domain(request: Request) -> JSONBody | tuple[JSONBody, int]:
    try:
        body = await json_body(request)
        domain = text_field(body, "domain")
        if not domain.strip():
            raise ValidationError("Domain is required")
        checker: DomainChecker = request.app.state.checker
        verdict = await checker.lookup(domain)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except NamingError:
        logger.exception("Domain check error")
        return {"error": "Failed to check domain availability"}, 500
    return verdict.to_dict()


@aJSONResponse
async def generate_names(request: Request) -> JSONBody | tuple[JSONBody, int]:
    cfg: config.Config = request.app.state.config
    pipeline = NamingPipeline(
        llm=request.app.state.llm,
        checker=request.app.state.checker,
        max_attempts=cfg.max_attempts,
        min_available=cfg.min_available_domains,
    )
    try:
        body = await json_body(request)
        result = await pipeline.run(
            text_field(body, "industry"),
            text_field(body, "keywords"),
            text_field(body, "tone") or None,
        )
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConfigurationError as e:
        return {"error": str(e)}, 500
    except Exception as e:
        logger.exception("Naming pipeline error")
        return {"error": "Failed to generate names.", "details": str(e)}, 500
    return result.to_dict()


@contextlib.asynccontextmanager
async def lifespan(app: Starlette):
    yield
    await app.state.llm.close()
    await app.state.checker.close()


def create_app(
    cfg: config.Config | None = None,
    *,
    llm: LLMService | None = None,
    checker: DomainChecker | None = None,
) -> Starlette:
    cfg = CONFIG if cfg is None else cfg
    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/api/check-domain", check_domain, methods=["POST"]),
            Route("/api/generate-names", generate_names, methods=["POST"]),
        ],
        lifespan=lifespan,
    )
    app.state.config = cfg
    app.state.llm = (
        LLMService(
            openai_config=cfg.openai_provider(),
            gemini_config=cfg.gemini_provider(),
        )
        if llm is None
        else llm
    )
    app.state.checker = (
        DomainChecker(resolver_url=cfg.dns_resolver_url, timeout=cfg.dns_timeout)
        if checker is None
        else checker
    )
    return app


app = create_app()
