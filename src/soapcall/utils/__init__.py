# soapcall/utils/__init__.py

from .config_loader import LoggingSection, SoapCallConfig, load_config
from .datetime_utils import format_for_soap
from .logger import configure_logging, setup_logger
from .model_tools import TAG_METADATA_KEY, is_frozen_record, is_record, record_tags, soap_tag
from .xml_parser import (
    check_for_soap_fault,
    child_elements,
    element_text,
    extract_soap_body,
    find_child,
    local_name,
    parse_soap_response,
)
from .xml_text import escape_xml_text

__all__: list[str] = [
    # config_loader.py
    'LoggingSection',
    'SoapCallConfig',
    'load_config',
    # datetime_utils.py
    'format_for_soap',
    # logger.py
    'configure_logging',
    'setup_logger',
    # model_tools.py
    'TAG_METADATA_KEY',
    'is_frozen_record',
    'is_record',
    'record_tags',
    'soap_tag',
    # xml_parser.py
    'check_for_soap_fault',
    'child_elements',
    'element_text',
    'extract_soap_body',
    'find_child',
    'local_name',
    'parse_soap_response',
    # xml_text.py
    'escape_xml_text',
]
