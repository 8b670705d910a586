# ==========================================================
# 📦 src/team_distribution/entities/team_entities.py
# ==========================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from common.settings import DEFAULT_MAX_ACTIVITIES_PER_ROUTE


@dataclass
class ServiceRegion:
    """Par cidade + bairro atendido por uma equipe (bairro vazio = cidade inteira)."""
    city: str = ""
    neighborhood: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceRegion":
        return cls(city=data.get("city") or "", neighborhood=data.get("neighborhood") or "")


@dataclass
class WorkSchedule:
    day_of_week: str
    start_time: str = "08:00"
    end_time: str = "18:00"
    is_day_off: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkSchedule":
        return cls(
            day_of_week=data.get("dayOfWeek", ""),
            start_time=data.get("startTime", "08:00"),
            end_time=data.get("endTime", "18:00"),
            is_day_off=bool(data.get("isDayOff", False)),
        )


@dataclass
class TeamMember:
    id: str
    name: str
    is_on_vacation: bool = False

    # 🔹 Carteira fixa: nomes de clientes (texto livre, não referência)
    portfolio: List[str] = field(default_factory=list)
    schedule: List[WorkSchedule] = field(default_factory=list)

    # 🔹 Logística (repassado ao serviço de IA)
    transport_mode: Optional[str] = None
    preferred_start_location: Optional[str] = None
    preferred_end_location: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamMember":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            is_on_vacation=bool(data.get("isOnVacation", False)),
            portfolio=list(data.get("portfolio") or []),
            schedule=[WorkSchedule.from_dict(s) for s in data.get("schedule") or []],
            transport_mode=data.get("transportMode"),
            preferred_start_location=data.get("preferredStartLocation"),
            preferred_end_location=data.get("preferredEndLocation"),
        )


# ==========================================================
# 👥 Equipe (dona exclusiva de membros e regiões)
# ==========================================================
@dataclass
class Team:
    id: str
    name: str
    is_active: bool = True
    max_activities_per_route: int = DEFAULT_MAX_ACTIVITIES_PER_ROUTE
    regions: List[ServiceRegion] = field(default_factory=list)
    members: List[TeamMember] = field(default_factory=list)
    office_address: Optional[str] = None

    @property
    def available_members(self) -> List[TeamMember]:
        return [m for m in self.members if not m.is_on_vacation]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        max_act = data.get("maxActivitiesPerRoute")
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            is_active=bool(data.get("isActive", True)),
            max_activities_per_route=(
                int(max_act) if max_act is not None else DEFAULT_MAX_ACTIVITIES_PER_ROUTE
            ),
            regions=[ServiceRegion.from_dict(r) for r in data.get("regions") or []],
            members=[TeamMember.from_dict(m) for m in data.get("members") or []],
            office_address=data.get("officeAddress"),
        )
