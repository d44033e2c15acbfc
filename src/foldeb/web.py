import dataclasses
import logging
import platform
from contextlib import asynccontextmanager
from functools import partial
from time import time

import anyio
import psutil
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from foldeb import prometheus as prom
from foldeb.__version__ import __version__
from foldeb.engine import ClassifierConfig, ErrorClassifier, find_error_branches, split_lines
from foldeb.languages import SUPPORTED_LANGUAGES, is_supported
from foldeb.models import FoldingRangeResult, FoldRequest, FoldResponse, HealthResponse
from foldeb.utils import get_str_env, setup_logging


log_level_name = get_str_env('FOLDEB_LOG_LEVEL', 'INFO').upper()
setup_logging(default='INFO')

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the classifier is built once and shared read-only by all requests
    config = ClassifierConfig.from_env()
    app.state.classifier = ErrorClassifier(config=config)
    logger.info(
        f'Classifier ready: {len(app.state.classifier.rules)} rules, '
        f'depth_gate={config.depth_gate}, depth_threshold={config.depth_threshold}'
    )

    yield

    logger.info('Shutting down foldeb')


app = FastAPI(
    title='foldeb',
    version=__version__,
    description="""
    Finds error-handling branches in source code so editors can fold them.

    ## Endpoints

    * `/v1/fold` - Find foldable error-handling blocks in a document
    * `/health` - Check service health
    * `/metrics` - Prometheus metrics

    Blocks are recovered from indentation alone, so any language with
    consistent indentation works. Supported language ids are
    javascript, typescript, c, cpp, csharp, java and python.
    """,
    license_info={'name': 'MIT'},
    lifespan=lifespan,
    docs_url='/docs',
    redoc_url='/redoc',
)


def get_os_info() -> dict:
    return {
        'system': platform.system(),
        'release': platform.release(),
        'version': platform.version(),
        'machine': platform.machine(),
    }


def get_system_resources() -> dict:
    mem = psutil.virtual_memory()
    return {
        'cpu_cores': psutil.cpu_count(logical=True),
        'cpu_cores_physical': psutil.cpu_count(logical=False),
        'ram_total_gb': round(mem.total / (1024**3), 2),
        'ram_available_gb': round(mem.available / (1024**3), 2),
        'ram_percent_used': mem.percent,
    }


def get_python_packages() -> dict:
    import importlib.metadata

    python_packages = {}
    key_packages = ['fastapi', 'pydantic', 'uvicorn', 'psutil', 'prometheus-client', 'click']
    for package in key_packages:
        try:
            version = importlib.metadata.version(package)
            python_packages[package] = version
        except importlib.metadata.PackageNotFoundError:
            pass

    return python_packages


def get_constants() -> dict:
    config: ClassifierConfig = app.state.classifier.config
    return {
        'LOG_LEVEL': log_level_name,
        'DEPTH_GATE': config.depth_gate,
        'DEPTH_THRESHOLD': config.depth_threshold,
        'COMMENT_MARKERS': list(config.comment_markers),
        'RULES': len(app.state.classifier.rules),
    }


@app.get('/health', tags=['General'], response_model=HealthResponse)
async def health():
    """
    Health check and system introspection endpoint.

    Returns:
    - Service status
    - Application version
    - Operating system information
    - Effective classifier configuration
    """
    prom.record_http_response('GET', '/health', 200)

    return {
        'status': 'ok',
        'app_version': __version__,
        'python_version': platform.python_version(),
        'os_info': get_os_info(),
        'system_resources': get_system_resources(),
        'python_packages': get_python_packages(),
        'constants': get_constants(),
        'supported_languages': list(SUPPORTED_LANGUAGES),
    }


@app.get('/metrics', tags=['Monitoring'], include_in_schema=True)
async def metrics():
    """
    Prometheus metrics endpoint.

    **Metrics Categories:**
    - Request metrics (counts, durations)
    - Document sizes
    - Ranges found (by rule category)
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def _classifier_for(request: FoldRequest) -> ErrorClassifier:
    """Return the shared classifier, or a copy carrying the request's overrides."""
    base: ErrorClassifier = app.state.classifier
    overrides = {}
    if request.depth_gate is not None:
        overrides['depth_gate'] = request.depth_gate
    if request.depth_threshold is not None:
        overrides['depth_threshold'] = request.depth_threshold
    if not overrides:
        return base
    return ErrorClassifier(rules=base.rules, config=dataclasses.replace(base.config, **overrides))


@app.post(
    '/v1/fold',
    tags=['Folding'],
    summary='Find error-handling branches in a document',
    response_model=FoldResponse,
    responses={
        200: {'description': 'Document processed'},
        400: {'description': 'Unsupported language'},
        500: {'description': 'Internal error while processing'},
    },
)
async def fold(request: FoldRequest) -> FoldResponse:
    """
    Segment a document by indentation and return the blocks judged to be
    error handling.

    - **text**: Full document text
    - **language**: Optional language id, validated against the supported list
    - **depth_gate** / **depth_threshold**: Optional per-request policy overrides

    Each range is 0-based and inclusive. `header_line` is the line before the
    block, which an editor keeps visible when folding.
    """
    time_before = time()

    if request.language is not None and not is_supported(request.language):
        prom.record_fold_request('invalid_language', time() - time_before, 0, [])
        prom.record_http_response('POST', '/v1/fold', 400)
        raise HTTPException(
            status_code=400,
            detail=f'Unsupported language: {request.language}. Supported: {", ".join(SUPPORTED_LANGUAGES)}',
        )

    try:
        classifier = _classifier_for(request)
        lines = split_lines(request.text)
        # Offload CPU-bound classification to thread pool
        ranges = await anyio.to_thread.run_sync(partial(find_error_branches, lines, classifier))
    except Exception as e:
        logger.error(f'Error processing document: {e!s}')
        prom.record_fold_request('error', time() - time_before, 0, [])
        prom.record_http_response('POST', '/v1/fold', 500)
        raise HTTPException(status_code=500, detail=f'Internal error: {e!s}')

    duration = time() - time_before
    prom.record_fold_request('success', duration, len(lines), [r.category for r in ranges])
    prom.record_http_response('POST', '/v1/fold', 200)
    logger.debug(f'Found {len(ranges)} ranges in {len(lines)} lines in {duration:.4f}s')

    return FoldResponse(
        ranges=[FoldingRangeResult.from_range(r) for r in ranges],
        count=len(ranges),
        line_count=len(lines),
        language=request.language.lower() if request.language else None,
        time=duration,
    )
