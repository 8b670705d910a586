#rotasmart/src/common/api_schemas.py

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class RecordsPayload(BaseModel):
    """Linhas da planilha de rotas no formato camelCase (colunas extras permitidas)."""
    records: List[Dict[str, Any]] = Field(default_factory=list)


class ServiceRegionSchema(BaseModel):
    city: str = ""
    neighborhood: str = ""


class TeamMemberSchema(BaseModel):
    id: str
    name: str
    isOnVacation: bool = False
    portfolio: List[str] = Field(default_factory=list)
    schedule: List[Dict[str, Any]] = Field(default_factory=list)
    transportMode: Optional[str] = None
    preferredStartLocation: Optional[str] = None
    preferredEndLocation: Optional[str] = None


class TeamSchema(BaseModel):
    id: str
    name: str
    isActive: bool = True
    maxActivitiesPerRoute: Optional[int] = None
    regions: List[ServiceRegionSchema] = Field(default_factory=list)
    members: List[TeamMemberSchema] = Field(default_factory=list)
    officeAddress: Optional[str] = None
