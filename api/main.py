from dataclasses import asdict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.schemas import (
    AnalyticalResponse,
    SimulationRequest, SimulationResponse
)

from core.analytical import solve_analytical
from core.config import cors_origins
from core.models import SimulationConfig
from core.simulation import simulate
from core.validators import ConfigurationError

app = FastAPI(title="Queue Simulator API", version="1.0")

# allow the frontend to call the backend; QUEUE_SIM_CORS_ORIGINS restricts it
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(ConfigurationError)
def configuration_error(request: Request, exc: ConfigurationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})

def _to_core_config(req: SimulationRequest) -> SimulationConfig:
    # convert pydantic schema -> core dataclass, applying the model preset
    params = req.model_dump(exclude={"model"})
    return SimulationConfig.for_model(req.model, **params)

@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/simulate", response_model=SimulationResponse)
def simulate_endpoint(req: SimulationRequest):
    res = simulate(_to_core_config(req))

    # convert dataclasses -> dicts for pydantic response
    return SimulationResponse(
        queue_metrics=asdict(res.queue_metrics),
        simulation_metrics=asdict(res.simulation_metrics),
        server_activity=[asdict(a) for a in res.server_activity],
        jobs=[asdict(j) for j in res.jobs],
        final_clock=res.final_clock,
        truncated=res.truncated,
        unfinished_jobs=res.unfinished_jobs
    )

@app.post("/analytical", response_model=AnalyticalResponse)
def analytical(req: SimulationRequest):
    res = solve_analytical(_to_core_config(req))
    # JSON has no infinity; unstable systems report null queue metrics
    fields = {k: (None if v == float("inf") else v) for k, v in res.__dict__.items()}
    return AnalyticalResponse(**fields)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="127.0.0.1", port=8000)
