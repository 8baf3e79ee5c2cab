"""
HTTP middleware: permissive CORS and request tracing
"""

import logging
import time
import uuid

from fastapi import Request, Response, status

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Content-Type": "application/json",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, PUT, DELETE",
    "Access-Control-Allow-Headers": "Accept, Content-Type, Authorization, X-Control",
}


async def allow_cross_origin(request: Request, call_next):
    """Set CORS headers on every response, including unhandled errors; answer preflight requests directly"""
    if request.method == "OPTIONS":
        response = Response(status_code=status.HTTP_200_OK)
    else:
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=True)
            response = Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


async def inject_trace_id(request: Request, call_next):
    """Inject trace ID into all requests and responses"""
    trace_id = request.headers.get("X-Trace-Id", str(uuid.uuid4()))
    request.state.trace_id = trace_id

    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    response.headers["X-Trace-Id"] = trace_id
    response.headers["X-Process-Time"] = str(process_time)

    logger.info(
        f"[{trace_id}] {request.method} {request.url.path} - "
        f"{response.status_code} - {process_time:.3f}s"
    )
    return response
