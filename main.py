import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from cart_service.config import get_settings
from cart_service.errors import CartServiceError, ValidationFailed
from cart_service.routes import router as cart_router
from cart_service.schemas import FieldError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("cart_service")

app = FastAPI(title="Brewery Cart Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------
# Errores -> JSON
# -------------------------
@app.exception_handler(CartServiceError)
async def cart_service_error_handler(request: Request, exc: CartServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # JSON mal formado y similares: mismo 400 que las reglas de campos
    errors = [
        FieldError(
            value=err.get("input"),
            msg=err.get("msg", "Invalid value"),
            path=".".join(str(p) for p in err.get("loc", ())[1:]),
            location=str(err.get("loc", ("body",))[0]),
        ).model_dump()
        for err in exc.errors()
    ]
    failure = ValidationFailed(errors)
    return JSONResponse(
        status_code=failure.status_code, content=jsonable_encoder(failure.to_body())
    )


# Healthcheck
@app.api_route("/healthcheck", methods=["GET", "HEAD"], response_class=PlainTextResponse)
def healthcheck():
    return "The Cart Service is ALIVE!"


app.include_router(cart_router)


if __name__ == "__main__":
    logger.info(
        "Server is running on port %s (brewery API: %s)",
        settings.port,
        settings.brewery_api_url,
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
