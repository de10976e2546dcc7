"""
Module: metrics.py
Description: CloudWatch custom metrics for the Kefir Tracker API.

Counts the domain actions worth watching on a dashboard: batches
started, reminders scheduled and exports generated. Every datapoint
carries the deployment stage as an ``Environment`` dimension so dev and
prod share one namespace.

Key Components:
- MetricsClient.put_metric(): Publish one datapoint (never raises)
- MetricsClient.batch_created() / reminders_scheduled() / export_generated()

Dependencies: boto3, typing, logger
Author: Kefir Tracker Team
"""

from typing import Dict, Optional

import boto3

from kefir_tracker.utils.logger import get_logger

logger = get_logger(__name__)


class MetricsClient:
    """
    CloudWatch metrics client.

    Attributes:
        namespace: CloudWatch namespace datapoints are published under
        environment: Deployment stage added to every datapoint
    """

    def __init__(
        self,
        namespace: str = "KefirTracker",
        environment: Optional[str] = None,
        region_name: Optional[str] = None
    ):
        self.namespace = namespace
        self.environment = environment
        self.cloudwatch = boto3.client('cloudwatch', region_name=region_name)

        logger.info(
            "Metrics client initialized",
            namespace=namespace,
            environment=environment
        )

    def _dimensions(self, extra: Optional[Dict[str, str]]) -> list:
        merged: Dict[str, str] = {}
        if self.environment:
            merged['Environment'] = self.environment
        merged.update(extra or {})
        return [{'Name': name, 'Value': str(value)} for name, value in merged.items()]

    def put_metric(
        self,
        metric_name: str,
        value: float,
        unit: str = 'Count',
        dimensions: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Publish a metric to CloudWatch.

        Failures are logged and never propagated to the caller.

        Args:
            metric_name: Name of the metric
            value: Metric value
            unit: Metric unit (Count, Seconds, etc.)
            dimensions: Dimensions in addition to ``Environment``
        """
        metric_data = {
            'MetricName': metric_name,
            'Value': value,
            'Unit': unit
        }
        metric_dimensions = self._dimensions(dimensions)
        if metric_dimensions:
            metric_data['Dimensions'] = metric_dimensions

        try:
            self.cloudwatch.put_metric_data(
                Namespace=self.namespace,
                MetricData=[metric_data]
            )
        except Exception as e:
            # Metrics never fail a request
            logger.warning(
                "Failed to publish metric",
                metric_name=metric_name,
                value=value,
                error=str(e),
                namespace=self.namespace
            )
            return

        logger.debug(
            "Metric published",
            metric_name=metric_name,
            value=value,
            dimensions=dimensions
        )

    def batch_created(self, stage: str) -> None:
        self.put_metric('BatchCreated', 1, dimensions={'Stage': stage})

    def reminders_scheduled(self, count: int) -> None:
        if count:
            self.put_metric('RemindersScheduled', count)

    def export_generated(self, size_bytes: int) -> None:
        self.put_metric('ExportGenerated', 1)
        self.put_metric('ExportSize', size_bytes, unit='Bytes')
