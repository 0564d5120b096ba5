from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from ..controller import AppState, SignalController
from ..core.config import settings
from ..core.errors import AnalysisBusy, AnalysisFailed, InputMissing, UploadFailed
from ..core.storage import open_history_slot
from ..history import HistoryStore
from ..vision.client import OpenAIInferenceClient
from ..vision.schema import Signal

router = APIRouter(prefix="/v1", tags=["signals"])

_CONTROLLER: SignalController | None = None


async def get_controller() -> SignalController:
    """Process-wide controller, built once on the event loop with its history loaded."""
    global _CONTROLLER
    if _CONTROLLER is None:
        history = HistoryStore(open_history_slot(settings))
        history.load()
        client = OpenAIInferenceClient(model=settings.vision_model, api_key=settings.openai_api_key)
        _CONTROLLER = SignalController(history, client, timeout=settings.vision_timeout_sec)
    return _CONTROLLER


@router.post("/upload", response_model=AppState)
async def upload_chart(
    file: Optional[UploadFile] = File(None),
    controller: SignalController = Depends(get_controller),
):
    try:
        return await controller.select_image(file)
    except AnalysisBusy as e:
        raise HTTPException(409, e.message)
    except UploadFailed as e:
        raise HTTPException(400, e.message)


@router.post("/analyze", response_model=AppState)
async def analyze(controller: SignalController = Depends(get_controller)):
    try:
        return await controller.analyze()
    except InputMissing as e:
        raise HTTPException(400, e.message)
    except AnalysisBusy as e:
        raise HTTPException(409, e.message)
    except AnalysisFailed as e:
        raise HTTPException(502, e.message)


@router.get("/state", response_model=AppState)
def state(controller: SignalController = Depends(get_controller)):
    return controller.state


@router.get("/history", response_model=List[Signal])
def history(controller: SignalController = Depends(get_controller)):
    return controller.history.all()
