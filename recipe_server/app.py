import uuid
from contextlib import asynccontextmanager
from typing import Annotated, List

import structlog
from fastapi import Depends, FastAPI, HTTPException, Path, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import engine, outcomes, schemas
from .config import get_settings
from .db import init_db, make_engine
from .exceptions import InvalidField, InvalidIntent, StoreError
from .log import configure_logging
from .store import RecordStore

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    db_engine = make_engine(settings)
    init_db(db_engine)
    app.state.store = RecordStore(db_engine)
    logger.info("Recipe Server is running", port=settings.PORT)
    yield
    db_engine.dispose()


app = FastAPI(title=get_settings().APP_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def bind_request_id(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id, method=request.method, path=request.url.path
    )
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# RecipePatch already rejects unknown keys; this covers engine calls with a raw mapping
@app.exception_handler(InvalidField)
async def invalid_field_handler(request: Request, exc: InvalidField):
    logger.info("Rejected unknown fields", fields=exc.fields)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(InvalidIntent)
async def invalid_intent_handler(request: Request, exc: InvalidIntent):
    logger.info("Rejected update intent", reason=str(exc))
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    # driver detail stays in the logs
    logger.error("Store failure", cause=repr(exc.__cause__))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def get_store(request: Request) -> RecordStore:
    return request.app.state.store


# upper bound matches the 32-bit serial id column
MAX_RECIPE_ID = 2**31 - 1

RecipeId = Annotated[int, Path(gt=0, le=MAX_RECIPE_ID)]


def _not_found(outcome: outcomes.NotFound):
    raise HTTPException(status_code=404, detail=f"No recipe found with id {outcome.id}")


def _mutation_response(outcome: outcomes.Outcome) -> JSONResponse:
    if isinstance(outcome, outcomes.NotFound):
        _not_found(outcome)
    if isinstance(outcome, outcomes.Created):
        result = schemas.MutationResult(status="created", id=outcome.id)
        status_code = 201
    elif isinstance(outcome, outcomes.CreatedFallback):
        result = schemas.MutationResult(
            status="created", id=outcome.id, requested_id=outcome.requested_id
        )
        status_code = 201
    elif isinstance(outcome, outcomes.Updated):
        result = schemas.MutationResult(status="updated", id=outcome.id)
        status_code = 200
    elif isinstance(outcome, outcomes.Deleted):
        result = schemas.MutationResult(status="deleted", id=outcome.id)
        status_code = 200
    else:
        raise TypeError(f"Unexpected outcome {outcome!r}")
    return JSONResponse(
        status_code=status_code, content=result.model_dump(exclude_none=True)
    )


@app.get("/")
def read_root():
    return {"status": "Recipe Server is running"}


@app.get("/all-recipes", response_model=List[schemas.Recipe])
def all_recipes(store: RecordStore = Depends(get_store)):
    return engine.get_recipes(store)


@app.get("/recipe/{recipe_id}", response_model=schemas.Recipe)
def read_recipe(recipe_id: RecipeId, store: RecordStore = Depends(get_store)):
    outcome = engine.get_recipe(store, recipe_id)
    if isinstance(outcome, outcomes.NotFound):
        _not_found(outcome)
    return outcome.record


@app.post("/create-recipe", status_code=201, response_model=schemas.MutationResult)
def create_recipe(recipe: schemas.RecipeCreate, store: RecordStore = Depends(get_store)):
    return _mutation_response(engine.create_recipe(store, recipe))


@app.put("/update-recipe/{recipe_id}", response_model=schemas.MutationResult)
def update_recipe(
    recipe: schemas.RecipeCreate,
    recipe_id: RecipeId,
    store: RecordStore = Depends(get_store),
):
    return _mutation_response(engine.replace_recipe(store, recipe_id, recipe))


@app.patch("/patch-recipe/{recipe_id}", response_model=schemas.MutationResult)
def patch_recipe(
    patch: schemas.RecipePatch,
    recipe_id: RecipeId,
    store: RecordStore = Depends(get_store),
):
    # null values mean "leave unchanged"
    fields = patch.model_dump(exclude_none=True)
    return _mutation_response(engine.patch_recipe(store, recipe_id, fields))


@app.delete("/delete-recipe/{recipe_id}", response_model=schemas.MutationResult)
def delete_recipe(recipe_id: RecipeId, store: RecordStore = Depends(get_store)):
    return _mutation_response(engine.delete_recipe(store, recipe_id))
