"""
AI Agents Router — Per-brand automated agents: list, fetch, create, pause/resume, cost.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from brandops.schemas import AgentStatus, AIAgent, AIAgentCreate
from brandops.storage.base import Storage
from brandops.storage.factory import get_storage

router = APIRouter(prefix="/ai-agents", tags=["AI Agents"])


# ── Schemas ────────────────────────────────────────────────────────────

class AgentStatusUpdate(BaseModel):
    status: AgentStatus


class AgentCostUpdate(BaseModel):
    cost: float = Field(ge=0)


# ── Endpoints ───────────────────────────────────────────────────────────

@router.get("/{brand_id}", response_model=list[AIAgent])
async def list_agents(brand_id: int, storage: Storage = Depends(get_storage)):
    return await storage.get_ai_agents(brand_id)


@router.get("/{brand_id}/{agent_id}", response_model=AIAgent)
async def get_agent(brand_id: int, agent_id: int, storage: Storage = Depends(get_storage)):
    agent = await storage.get_ai_agent(agent_id)
    if not agent or agent.brand_id != brand_id:
        raise HTTPException(status_code=404, detail="AI agent not found")
    return agent


@router.post("", response_model=AIAgent, status_code=201)
async def create_agent(payload: AIAgentCreate, storage: Storage = Depends(get_storage)):
    """New agents always start with zero cost."""
    return await storage.create_ai_agent(payload)


@router.patch("/{agent_id}/status", response_model=AIAgent)
async def update_agent_status(agent_id: int, payload: AgentStatusUpdate, storage: Storage = Depends(get_storage)):
    agent = await storage.update_ai_agent_status(agent_id, payload.status)
    if not agent:
        raise HTTPException(status_code=404, detail="AI agent not found")
    return agent


@router.patch("/{agent_id}/cost", response_model=AIAgent)
async def update_agent_cost(agent_id: int, payload: AgentCostUpdate, storage: Storage = Depends(get_storage)):
    agent = await storage.update_ai_agent_cost(agent_id, payload.cost)
    if not agent:
        raise HTTPException(status_code=404, detail="AI agent not found")
    return agent
