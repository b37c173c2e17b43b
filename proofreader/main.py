from fastapi import FastAPI
from proofreader.api.routes_analyze import router as analyze_router
from proofreader.middleware.limits import BodySizeLimitMiddleware

app = FastAPI(title="Academic Proofreader")

app.add_middleware(BodySizeLimitMiddleware)

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(analyze_router)
