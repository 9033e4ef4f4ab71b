"""
GreenPlan Server - Material Endpoints

Recyclable material catalog. /types is the read-only alias used by the
log submission form.
"""

from typing import Annotated, List
from fastapi import APIRouter, Depends, Path, status

from auth import AuthenticateRequest
from database import GetMaterialManager
from managers import MaterialManager
from models.api import ROW_ID_MAX, CreatedResponse, MaterialRequest, MaterialResponse, MessageResponse
from models.auth import Identity


# Create router instance
router = APIRouter()


# ==================== Read Endpoints ====================

@router.get("/types", response_model=List[MaterialResponse], tags=["Materials"])
@router.get("/materials", response_model=List[MaterialResponse], tags=["Materials"])
def list_materials(
    identity: Identity = Depends(AuthenticateRequest),
    materials: MaterialManager = Depends(GetMaterialManager)
):
    """
    List all recyclable material types
    """
    return materials.ListMaterials()


# ==================== Admin Endpoints ====================

@router.post("/materials", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED, tags=["Materials"])
def create_material(
    material_request: MaterialRequest,
    identity: Identity = Depends(AuthenticateRequest),
    materials: MaterialManager = Depends(GetMaterialManager)
):
    """
    Add a material type (admin only)
    """
    material_id = materials.CreateMaterial(material_request, identity)
    return CreatedResponse(message="Material added successfully", id=material_id)


@router.put("/materials/{material_id}", response_model=MessageResponse, tags=["Materials"])
def update_material(
    material_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    material_request: MaterialRequest,
    identity: Identity = Depends(AuthenticateRequest),
    materials: MaterialManager = Depends(GetMaterialManager)
):
    """
    Update a material type (admin only)
    """
    materials.UpdateMaterial(material_id, material_request, identity)
    return MessageResponse(message="Material updated successfully")


@router.delete("/materials/{material_id}", response_model=MessageResponse, tags=["Materials"])
def delete_material(
    material_id: Annotated[int, Path(ge=1, le=ROW_ID_MAX)],
    identity: Identity = Depends(AuthenticateRequest),
    materials: MaterialManager = Depends(GetMaterialManager)
):
    """
    Delete a material type (admin only, only when nothing references it)
    """
    materials.DeleteMaterial(material_id, identity)
    return MessageResponse(message="Material deleted successfully")
