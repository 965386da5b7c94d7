from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from pagetrail.dependencies import get_current_user_id, get_library_service
from pagetrail.schemas.library import (
    AddWorkRequest,
    AddWorkResponse,
    AugmentedWorkResponse,
    DriftResponse,
    LogSessionRequest,
    LogSessionResponse,
    OpenLibraryDetailsResponse,
    PartialFailureResponse,
    ReadingSessionResponse,
    RepairResponse,
    UserBookResponse,
)
from pagetrail.services.enrichment import AugmentedWork
from pagetrail.services.library import LibraryService
from pagetrail.services.progress_ledger import SessionLoggedPageUpdateFailed

router = APIRouter(prefix="/api/library", tags=["library"])


def _augmented(view: AugmentedWork) -> AugmentedWorkResponse:
    work = UserBookResponse.model_validate(view.work).model_dump()
    return AugmentedWorkResponse(
        **work,
        open_library_details=OpenLibraryDetailsResponse.model_validate(view.enrichment),
        enriched=view.enriched,
        reading_sessions=[ReadingSessionResponse.model_validate(s) for s in view.sessions],
    )


@router.post("", response_model=AddWorkResponse, status_code=201)
async def add_work(
    data: AddWorkRequest,
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library_service),
):
    work = await library.add_work(user_id, data.open_library_key, data.title, data.author_name, data.image_url)
    return AddWorkResponse(
        message="Book added to library successfully!",
        work=UserBookResponse.model_validate(work),
    )


@router.get("", response_model=list[AugmentedWorkResponse])
async def list_library(
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library_service),
):
    return [_augmented(view) for view in await library.list_library(user_id)]


@router.get("/{work_id}", response_model=AugmentedWorkResponse)
async def get_work(
    work_id: int,
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library_service),
):
    return _augmented(await library.get_work(user_id, work_id))


@router.post(
    "/{work_id}/sessions",
    response_model=LogSessionResponse,
    responses={500: {"model": PartialFailureResponse}},
)
async def log_session(
    work_id: int,
    data: LogSessionRequest,
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library_service),
):
    result = await library.log_session(user_id, work_id, data.pages_read, data.notes)
    if isinstance(result, SessionLoggedPageUpdateFailed):
        body = PartialFailureResponse(
            message="Reading session logged, but failed to update current page.",
            session=ReadingSessionResponse.model_validate(result.session),
            expected_current_page=result.expected_current_page,
        )
        return JSONResponse(status_code=500, content=body.model_dump(mode="json"))
    return LogSessionResponse(
        message="Reading session logged and progress updated!",
        session=ReadingSessionResponse.model_validate(result.session),
        updated_current_page=result.updated_current_page,
    )


@router.get("/{work_id}/reconcile", response_model=DriftResponse)
async def check_progress(
    work_id: int,
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library_service),
):
    report = await library.check_drift(user_id, work_id)
    return DriftResponse(
        work_id=report.work_id,
        current_page_number=report.current_page_number,
        recomputed_page=report.recomputed_page,
        drifted=report.drifted,
    )


@router.post("/{work_id}/reconcile", response_model=RepairResponse)
async def repair_progress(
    work_id: int,
    user_id: str = Depends(get_current_user_id),
    library: LibraryService = Depends(get_library_service),
):
    work = await library.repair_current_page(user_id, work_id)
    return RepairResponse(
        message="Current page recomputed from reading sessions.",
        work=UserBookResponse.model_validate(work),
    )
