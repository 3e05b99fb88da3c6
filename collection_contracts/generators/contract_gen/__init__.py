from collection_contracts.generators.contract_gen.generator import (
    ContractGenerator,
    generate_contract_files,
)
from collection_contracts.generators.contract_gen.processor import process_schema
from collection_contracts.generators.contract_gen.render_contract import CONTRACT_BUILDERS

__all__ = [
    "CONTRACT_BUILDERS",
    "ContractGenerator",
    "generate_contract_files",
    "process_schema",
]
