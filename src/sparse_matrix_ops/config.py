from typing import List, Literal
from dataclasses import dataclass, field

from .constants import OPERATIONS, SECOND_OPERANDS
from .matrix_errors import InvalidOperationError, InvalidSecondOperandError, EmptyOperationsError


@dataclass
class BatchConfig:
    """
    Configuration for a batch run over a directory of matrix files.

    Every input file is loaded as the first operand; the second operand is
    derived from it according to ``second_operand``.
    """

    input_dir: str = 'Inputs'
    """Directory scanned for matrix text files."""

    output_dir: str = 'Outputs'
    """Directory the result files are written to. Created if missing."""

    operations: List[str] = field(default_factory=lambda: list(OPERATIONS))
    """Operations to run for every input file, any of 'add', 'subtract', 'multiply'."""

    second_operand: Literal['zero', 'self'] = 'zero'
    """How the second operand is built from the loaded matrix:
    - 'zero': an empty matrix with the same dimensions
    - 'self': the loaded matrix itself
    """

    input_extensions: List[str] = field(default_factory=lambda: ['.txt'])
    """File suffixes treated as matrix inputs. An empty list accepts every file."""

    skip_invalid_files: bool = False
    """Whether a file that fails to parse or compute is reported and skipped instead of aborting the run."""

    verbose: bool = True
    """Whether progress messages are printed."""

    def validate(self) -> None:
        """Validate configuration parameters."""
        if len(self.operations) == 0:
            raise EmptyOperationsError()
        for operation in self.operations:
            if operation not in OPERATIONS:
                raise InvalidOperationError(operation, OPERATIONS)
        if self.second_operand not in SECOND_OPERANDS:
            raise InvalidSecondOperandError(self.second_operand, SECOND_OPERANDS)
