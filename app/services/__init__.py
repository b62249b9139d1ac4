from .greeting_service import GreetingService

__all__ = ['GreetingService']
