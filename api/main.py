from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import generate

app = FastAPI(
    title="IREX Prospect Generator API",
    description="Generates prioritized irrigation-industry prospect lists as shareable Google Sheets.",
    version="1.0.0"
)

# Allow all CORS origins (restrict to the frontend domain once it is deployed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate.router, prefix="/api", tags=["Prospects"])


@app.get("/")
def read_root():
    return {"message": "IREX Prospect Generator API is running."}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api.main:app", host="0.0.0.0", port=8000, reload=True)
