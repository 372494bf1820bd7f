"""
Composition root: wires config, transport and workflow together.
"""

from eds_analytics.config.state import ConfigState
from eds_analytics.exchange.data_exchange import DataExchange
from eds_analytics.orchestration.workflows.analytics_workflow import AnalyticsWorkflow
from eds_analytics.orchestration.workflows.base import WorkflowResult
from eds_analytics.provisioning.provisioner import TypeStreamProvisioner
from eds_analytics.transport.aiohttp_client import AiohttpClient
from eds_analytics.transport.client import SdsClient


async def run_analytics(config: ConfigState | None = None) -> WorkflowResult:
    """Run the analytics workflow once.

    The HTTP session is opened here and closed on every exit path.

    Raises:
        TransportError, DecodeError, EmptyInputError: From the failing step
    """
    config = config or ConfigState()

    async with AiohttpClient(config.http.to_client_config()) as http:
        client = SdsClient(http, config.store.to_endpoint())
        workflow = AnalyticsWorkflow(
            provisioner=TypeStreamProvisioner(client),
            exchange=DataExchange(client),
            config=config.workflow,
        )
        return await workflow.execute()
