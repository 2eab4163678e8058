from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from gigs_harness.api.verify import router as verify_router

app = FastAPI(title="GIGS Conformance Harness")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(verify_router)

@app.get("/")
def root():
    return {"status": "ok", "service": "gigs-conformance-harness"}
