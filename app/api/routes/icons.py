from fastapi import APIRouter, Response

from app.ui.icons import key_icon

router = APIRouter(prefix="/icons", tags=["icons"])


@router.get("/key.svg")
def key_svg(class_name: str | None = None) -> Response:
    return Response(content=str(key_icon(class_name)), media_type="image/svg+xml")
