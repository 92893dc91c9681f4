"""
Expense management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from kickoff.db.session import get_db
from kickoff.models.expense import Expense, ExpenseCategory
from kickoff.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse, SplitResponse
from kickoff.services import expense_service
from kickoff.services.expense_service import ExpenseServiceError

router = APIRouter(prefix="/expenses", tags=["expenses"])


def build_expense_response(expense: Expense) -> ExpenseResponse:
    """Build the response for an expense with payer and splits loaded."""
    return ExpenseResponse(
        id=expense.id,
        description=expense.description,
        amount=float(expense.amount),
        category=expense.category,
        paid_by=expense.payer_id,
        payer_name=expense.payer.name,
        date=expense.date,
        notes=expense.notes,
        splits=[
            SplitResponse(
                id=split.id,
                traveler_id=split.traveler_id,
                traveler_name=split.traveler.name,
                share=float(split.share),
                settled=split.settled
            )
            for split in sorted(expense.splits, key=lambda s: s.id)
        ],
        created_at=expense.created_at,
        updated_at=expense.updated_at
    )


def get_expense_or_404(expense_id: int, db: Session) -> Expense:
    """Get an expense or raise 404."""
    expense = expense_service.get_expense(expense_id, db)
    if not expense:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Expense not found"
        )
    return expense


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    category: Optional[ExpenseCategory] = None,
    paid_by: Optional[int] = None,
    db: Session = Depends(get_db)
):
    """List expenses, optionally filtered by category and payer."""
    expenses = expense_service.list_expenses(
        db,
        category=category.value if category else None,
        paid_by=paid_by
    )
    return [build_expense_response(e) for e in expenses]


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Log a new expense; without explicit splits it is shared equally."""
    try:
        expense = expense_service.create_expense_with_splits(expense_data, db)
    except ExpenseServiceError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return build_expense_response(expense)


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Get a single expense."""
    return build_expense_response(get_expense_or_404(expense_id, db))


@router.patch("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    expense_id: int,
    update_data: ExpenseUpdate,
    db: Session = Depends(get_db)
):
    """Update an expense; provided splits replace the existing ones."""
    expense = get_expense_or_404(expense_id, db)
    try:
        expense = expense_service.update_expense(expense, update_data, db)
    except ExpenseServiceError as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    return build_expense_response(expense)


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: int,
    db: Session = Depends(get_db)
):
    """Delete an expense and its splits."""
    expense = get_expense_or_404(expense_id, db)
    expense_service.delete_expense(expense, db)
    return {"success": True}
