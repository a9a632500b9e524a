from graphneat.run.config        import Config
from graphneat.run.logger_setup  import setup_logger

__all__ = ['Config', 'setup_logger']
