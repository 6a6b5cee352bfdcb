"""Image and chart publishing.

- image_publisher: buildx build and push of the container image
- chart_publisher: package and push of each Helm chart
- orchestrator: the ordered publish state machine
"""

from oci_publish.constants import PublishConstants

from .chart_publisher import ChartPublisher, ChartPublishResult
from .image_publisher import ImagePublisher
from .orchestrator import PublishOrchestrator, PublishResult
from .states import PublishState, StateMachine, StateTransition

__all__ = [
    "ChartPublisher",
    "ChartPublishResult",
    "ImagePublisher",
    "PublishConstants",
    "PublishOrchestrator",
    "PublishResult",
    "PublishState",
    "StateMachine",
    "StateTransition",
]
