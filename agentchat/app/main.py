from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
import logging
import uvicorn
from agentchat.app.dependencies import get_chat_service
from agentchat.chat_service import ChatService
from agentchat.config import DOCUMENT_FILENAME, HOST, LOG_LEVEL, PORT
from agentchat.database import create_db_and_tables
from agentchat.errors import ValidationError
from agentchat.models import ChatRequest


app = FastAPI(title="Workspace Chat API")

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(message)s')
logger = logging.getLogger(__name__)

router = APIRouter()


@app.on_event("startup")
def on_startup():
    create_db_and_tables()


async def read_message(request: Request):
    """Return the ``message`` field of the JSON body, or None when there is no usable one."""
    try:
        return ChatRequest.model_validate(await request.json()).message
    except ValueError:  # invalid JSON or a body that is not {"message": str}
        return None


@router.post("/api/chat")
async def send_message(request: Request, service: ChatService = Depends(get_chat_service)):
    workspace_id = request.headers.get("workspace_id")
    domain_mode = request.headers.get("isRealEstateAgent") == "true"
    logger.info(f"Chat request: workspace_id={workspace_id}, isRealEstateAgent={domain_mode}")
    try:
        # the body is only read once the workspace is known
        message = await read_message(request) if workspace_id else None
        result = await run_in_threadpool(service.send_message, workspace_id, message, domain_mode)
    except ValidationError as e:
        logger.warning(f"Rejected chat request: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Error in send_message: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to process request."})

    if result.document is not None:
        return Response(
            content=result.document,
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={DOCUMENT_FILENAME}"},
        )
    return JSONResponse(content={"reply": result.reply})


@router.get("/api/chat")
async def get_history(request: Request, service: ChatService = Depends(get_chat_service)):
    workspace_id = request.headers.get("workspace_id")
    logger.info(f"Chat history requested: workspace_id={workspace_id}")
    try:
        chats = await run_in_threadpool(service.get_history, workspace_id)
    except ValidationError as e:
        logger.warning(f"Rejected history request: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.error(f"Error fetching chat history: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch chat history."})
    return JSONResponse(content={"chats": jsonable_encoder(chats)})

app.include_router(router)


def main():
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()
