from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from courtdesk.app.db.session import get_db
from courtdesk.app.dependencies.auth import get_current_user
from courtdesk.app.models.material import Material
from courtdesk.app.models.user import User
from courtdesk.app.schemas.material import MaterialCreate, MaterialRead, MaterialUpdate

router = APIRouter(prefix="/materials", tags=["materials"])


def _get_owned_material(db: Session, material_id: int, user_id: int) -> Material:
    material = db.query(Material).filter(Material.id == material_id, Material.owner_id == user_id).first()
    if not material:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Material not found")
    return material


@router.post("/", response_model=MaterialRead, status_code=status.HTTP_201_CREATED)
async def create_material(material_in: MaterialCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    material = Material(owner_id=current_user.id, **material_in.model_dump())
    db.add(material)
    db.commit()
    db.refresh(material)
    return material


@router.get("/", response_model=list[MaterialRead])
async def list_materials(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return (
        db.query(Material)
        .filter(Material.owner_id == current_user.id)
        .order_by(Material.name.asc(), Material.id.asc())
        .all()
    )


@router.get("/{material_id}", response_model=MaterialRead)
async def get_material(material_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_owned_material(db, material_id, current_user.id)


@router.put("/{material_id}", response_model=MaterialRead)
async def update_material(
    material_id: int,
    material_in: MaterialUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    material = _get_owned_material(db, material_id, current_user.id)
    for field, value in material_in.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(material, field, value)
    db.commit()
    db.refresh(material)
    return material


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(material_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    material = _get_owned_material(db, material_id, current_user.id)
    db.delete(material)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
