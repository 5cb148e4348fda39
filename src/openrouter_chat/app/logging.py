import logging

from openrouter_chat.infrastructure.data_models import ChatResponse


def log_chat_response(chat_response: ChatResponse, logger: logging.Logger) -> None:
    logger.info(f"Reply created by model: {chat_response.model or 'Unknown'}")
    logger.info(f"Usage: {chat_response.usage or 'Unknown'}")
    logger.info(f"Choices: {len(chat_response.choices)}")
