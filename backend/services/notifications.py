"""Student notifications published to an SNS topic."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from backend.core import config
from backend.core.errors import IntegrationError

logger = logging.getLogger(__name__)


def build_student_message(alumno) -> tuple[str, str]:
    subject = f'Calificaciones de {alumno.nombres} {alumno.apellidos}'
    message = (
        'Información del alumno\n'
        f'Nombre: {alumno.nombres} {alumno.apellidos}\n'
        f'Promedio: {alumno.promedio}\n'
    )
    return subject[:99], message


class Notifier:
    def __init__(self, topic_arn: str, client=None, region: str | None = None):
        self.topic_arn = topic_arn
        self.region = region or config.AWS_REGION
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client('sns', region_name=self.region)
        return self._client

    def publish(self, subject: str, message: str) -> str:
        """Publish once to the topic and return the SNS message id."""
        if not self.topic_arn:
            raise IntegrationError('SNS_TOPIC_ARN is not configured.')

        try:
            response = self.client.publish(TopicArn=self.topic_arn, Subject=subject, Message=message)
        except (BotoCoreError, ClientError) as exc:
            logger.exception('Publish to %s failed', self.topic_arn)
            raise IntegrationError(str(exc)) from exc

        return response.get('MessageId', '')
