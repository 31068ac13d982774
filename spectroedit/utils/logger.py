import logging
import os
import sys

def setup_logger(level=None):
    logger = logging.getLogger("SpectroEdit")
    level = level or os.environ.get("SPECTROEDIT_LOG_LEVEL", "INFO")
    logger.setLevel(level)
    
    # Console Handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.DEBUG)
    
    # Formatter
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    ch.setFormatter(formatter)
    
    if not logger.handlers:
        logger.addHandler(ch)
        
    return logger

logger = setup_logger()
