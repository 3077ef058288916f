# app/pipeline.py
"""Request pipeline: an explicit, ordered list of stages ahead of one handler.

A request moves AUTHENTICATING -> (VALIDATING ->) HANDLING -> RESPONDING.
The first stage that returns an ``Err`` (or raises) moves it to FAILED, the
remaining stages are skipped and the error is serialized once by
``error_response``. ``Pipeline.run`` always returns a response.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .auth import authenticate, extract_api_key
from .database import ProductStore
from .errors import AppError, error_response, translate_error
from .models import ProductIn
from .result import Err, Ok, Result
from .validation import validate_product

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    AUTHENTICATING = "authenticating"
    VALIDATING = "validating"
    HANDLING = "handling"
    RESPONDING = "responding"
    FAILED = "failed"


@dataclass
class RequestContext:
    store: ProductStore
    headers: Mapping[str, str] = field(default_factory=dict)
    path_params: Dict[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    payload: Optional[ProductIn] = None
    state: Optional[PipelineState] = None
    error: Optional[AppError] = None


@dataclass(frozen=True)
class Reply:
    status_code: int
    body: Any


Stage = Callable[[RequestContext], Result[Any]]
Handler = Callable[[RequestContext], Result[Reply]]


def authentication_stage(secret: str) -> Stage:
    def check_api_key(ctx: RequestContext) -> Result[None]:
        return authenticate(extract_api_key(ctx.headers), secret)

    return check_api_key


def validation_stage(ctx: RequestContext) -> Result[ProductIn]:
    if ctx.body.strip():
        try:
            payload = json.loads(ctx.body)
        except (ValueError, RecursionError):
            return Err(AppError.validation("Malformed JSON body"))
    else:
        payload = {}

    outcome = validate_product(payload)
    if isinstance(outcome, Ok):
        ctx.payload = outcome.value
    return outcome


class Pipeline:
    def __init__(
        self,
        stages: Sequence[Tuple[PipelineState, Stage]],
        handler: Handler,
        include_stack: bool = False,
    ):
        self.stages: List[Tuple[PipelineState, Stage]] = list(stages)
        self.handler = handler
        self.include_stack = include_stack

    def run(self, ctx: RequestContext) -> JSONResponse:
        steps = self.stages + [(PipelineState.HANDLING, self.handler)]
        for state, step in steps:
            ctx.state = state
            try:
                outcome = step(ctx)
            except Exception as exc:
                outcome = Err(translate_error(exc))
            if isinstance(outcome, Err):
                return self._fail(ctx, outcome.error)

        ctx.state = PipelineState.RESPONDING
        reply: Reply = outcome.value
        return JSONResponse(status_code=reply.status_code, content=jsonable_encoder(reply.body))

    def _fail(self, ctx: RequestContext, err: AppError) -> JSONResponse:
        logger.debug("Pipeline failed while %s: %r", ctx.state.value, err)
        ctx.state = PipelineState.FAILED
        ctx.error = err
        return error_response(err, include_stack=self.include_stack)


def build_pipeline(
    handler: Handler,
    api_key: str,
    validate: bool = False,
    include_stack: bool = False,
) -> Pipeline:
    stages: List[Tuple[PipelineState, Stage]] = [
        (PipelineState.AUTHENTICATING, authentication_stage(api_key)),
    ]
    if validate:
        stages.append((PipelineState.VALIDATING, validation_stage))
    return Pipeline(stages, handler, include_stack=include_stack)
