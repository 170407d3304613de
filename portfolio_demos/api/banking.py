"""
Banking simulator endpoints
"""

from typing import Any, Dict
from fastapi import APIRouter, HTTPException, Depends, status

from .deps import DemoSystem, get_demo_system
from .schemas import BankingCommandRequest, BatchRequest
from ..scenarios import COMMAND_TEMPLATES, EXAMPLE_SCENARIOS, account_type_info, get_scenario
from ..session import BankingSession, account_to_dict


router = APIRouter()


def _get_session(system: DemoSystem, session_id: str) -> BankingSession:
    try:
        return system.sessions.get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")


@router.get("/scenarios")
async def list_scenarios():
    """List example command batches"""
    return {"scenarios": [scenario.to_dict() for scenario in EXAMPLE_SCENARIOS]}


@router.get("/scenarios/{scenario_id}")
async def get_scenario_details(scenario_id: str):
    """Get one example command batch"""
    try:
        return get_scenario(scenario_id).to_dict()
    except KeyError:
        raise HTTPException(status_code=404, detail="Scenario not found")


@router.get("/command-templates")
async def list_command_templates():
    """Get command syntax templates"""
    return {"templates": COMMAND_TEMPLATES}


@router.get("/account-types")
async def list_account_types(system: DemoSystem = Depends(get_demo_system)):
    """Get limits for each account type"""
    return {"account_types": account_type_info(system.rules)}


@router.post("/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(system: DemoSystem = Depends(get_demo_system)):
    """Start a new simulator session"""
    session = system.sessions.create()
    return session.snapshot()


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, system: DemoSystem = Depends(get_demo_system)):
    """Get session state"""
    return _get_session(system, session_id).snapshot()


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str, system: DemoSystem = Depends(get_demo_system)):
    """End a session"""
    if not system.sessions.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Session deleted successfully"}


@router.post("/sessions/{session_id}/commands")
async def execute_command(
    session_id: str,
    request: BankingCommandRequest,
    system: DemoSystem = Depends(get_demo_system)
):
    """Run a single command"""
    session = _get_session(system, session_id)
    session.execute_command(request.command)
    return session.snapshot()


@router.post("/sessions/{session_id}/batch")
async def execute_batch(
    session_id: str,
    request: BatchRequest,
    system: DemoSystem = Depends(get_demo_system)
):
    """Run a batch of commands"""
    session = _get_session(system, session_id)
    session.execute_batch(request.commands)
    return session.snapshot()


@router.post("/sessions/{session_id}/scenarios/{scenario_id}")
async def run_scenario(
    session_id: str,
    scenario_id: str,
    system: DemoSystem = Depends(get_demo_system)
):
    """Reset the session and run an example scenario in it"""
    session = _get_session(system, session_id)
    try:
        scenario = get_scenario(scenario_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Scenario not found")

    session.reset()
    session.execute_batch(list(scenario.commands))
    result: Dict[str, Any] = session.snapshot()
    result["scenario"] = scenario.to_dict()
    return result


@router.post("/sessions/{session_id}/reset")
async def reset_session(session_id: str, system: DemoSystem = Depends(get_demo_system)):
    """Clear every account and history in the session"""
    session = _get_session(system, session_id)
    session.reset()
    return session.snapshot()


@router.get("/sessions/{session_id}/accounts/{account_id}")
async def get_account(
    session_id: str,
    account_id: str,
    system: DemoSystem = Depends(get_demo_system)
):
    """Get one account with its transaction history"""
    session = _get_session(system, session_id)
    account = session.get_account(account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Account not found")

    result = account_to_dict(account)
    result["transactions"] = session.master_control.transaction_logger.get_transactions(account_id)
    return result
