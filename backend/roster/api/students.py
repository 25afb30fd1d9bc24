"""
Student API endpoints - HTTP surface over the StudentManager.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, Request, Response, status, Query
from typing import List, Optional

from ..models import Student, StudentCreate, StudentUpdate, SortRequest, SortResult, SearchResult, RosterSummary
from ..core import StudentManager, ValidationError, NotFoundError, FormatError
from ..core.algorithms import COMPLEXITY_LABELS, SortAlgorithm, SearchAlgorithm
from ..config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"])


def get_manager(request: Request) -> StudentManager:
    """Return the application's shared StudentManager."""
    return request.app.state.manager


@router.get("", response_model=List[Student])
async def list_students(manager: StudentManager = Depends(get_manager)):
    """List all students in the roster's current order."""
    return manager.get_students()


@router.get("/summary", response_model=RosterSummary)
async def get_summary(manager: StudentManager = Depends(get_manager)):
    """Student count and average score."""
    return manager.summary()


@router.get("/algorithms")
async def list_algorithms():
    """Available algorithms with their complexity labels and the configured defaults."""
    return {
        "sort": {a.value: COMPLEXITY_LABELS[a.value] for a in SortAlgorithm},
        "search": {a.value: COMPLEXITY_LABELS[a.value] for a in SearchAlgorithm},
        "defaults": {
            "sort": settings.default_sort_algorithm,
            "search": settings.default_search_algorithm,
        },
    }


@router.get("/export")
async def export_students(manager: StudentManager = Depends(get_manager)):
    """Download the roster as a JSON file."""
    return Response(
        content=manager.save_to_json(),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="roster.json"'},
    )


@router.post("/import")
async def import_students(request: Request, manager: StudentManager = Depends(get_manager)):
    """
    Replace the roster with an uploaded JSON export.

    The request body is the raw file content.
    """
    body = await request.body()
    try:
        count = manager.load_from_json(body)
    except FormatError as e:
        logger.warning(f"Import rejected: {e.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return {"status": "success", "count": count}


@router.post("/sort", response_model=SortResult)
async def sort_students(request: SortRequest, manager: StudentManager = Depends(get_manager)):
    """
    Sort the roster with the chosen algorithm.

    With persist (the default) the result becomes the roster's order.
    """
    algorithm = request.algorithm or settings.default_sort_algorithm
    try:
        if request.persist:
            return manager.reorder_by(algorithm, request.key, request.order)
        return manager.sorted_view(algorithm, request.key, request.order)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/search", response_model=SearchResult)
async def search_students(
    q: str = Query(""),
    algorithm: Optional[str] = Query(None),
    manager: StudentManager = Depends(get_manager)
):
    """Search by name or registration code."""
    try:
        return manager.search(q, algorithm or settings.default_search_algorithm)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: str, manager: StudentManager = Depends(get_manager)):
    """Get one student."""
    try:
        return manager.get_student(student_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("", response_model=Student, status_code=status.HTTP_201_CREATED)
async def create_student(student: StudentCreate, manager: StudentManager = Depends(get_manager)):
    """Add a student. The registration code must be digits only."""
    try:
        return manager.add_student(student)
    except ValidationError as e:
        logger.warning(f"Student rejected: {e.message}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)


@router.patch("/{student_id}", response_model=Student)
async def update_student(
    student_id: str,
    update: StudentUpdate,
    manager: StudentManager = Depends(get_manager)
):
    """Update the supplied fields of a student."""
    try:
        return manager.update_student(student_id, update)
    except NotFoundError as e:
        logger.warning(f"Update rejected: {e.message}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{student_id}")
async def delete_student(student_id: str, manager: StudentManager = Depends(get_manager)):
    """Delete a student. Unknown ids are not an error."""
    return {"deleted": manager.delete_student(student_id)}
