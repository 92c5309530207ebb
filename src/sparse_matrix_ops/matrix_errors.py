class SparseMatrixError(ValueError):
    """Base class for sparse matrix errors."""
    pass

class BatchConfigError(ValueError):
    """Base class for batch driver configuration errors."""
    pass



class DimensionMismatchError(SparseMatrixError):
    """Raised when the operand shapes are incompatible for an arithmetic operation."""

    def __init__(self, operation: str, left_shape: tuple[int, int], right_shape: tuple[int, int]):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape

        if operation == 'multiplication':
            message = (
                f"Number of columns in the first matrix must match the number of rows in the second matrix "
                f"for multiplication: {left_shape} @ {right_shape}"
            )
        else:
            message = f"Matrices must have the same dimensions for {operation}: {left_shape} vs {right_shape}"
        super().__init__(message)


class FormatError(SparseMatrixError):
    """Raised when matrix text cannot be parsed."""

    def __init__(self, message: str, line_number: int = None, line: str = None):
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"{message} (line {line_number}: {line!r})"
        super().__init__(message)


class NoInputFilesError(SparseMatrixError):
    """Raised when the batch input directory holds no matrix files."""

    def __init__(self, input_dir: str):
        self.input_dir = input_dir
        message = f"No files found in the input directory: {input_dir}"
        super().__init__(message)


class InvalidOperationError(BatchConfigError):
    """Raised when an unknown operation is requested."""

    def __init__(self, operation: str, valid_operations: list):
        self.operation = operation
        self.valid_operations = valid_operations
        message = f"Invalid operation '{operation}'. Must be one of: {valid_operations}"
        super().__init__(message)


class InvalidSecondOperandError(BatchConfigError):
    """Raised when an unknown second operand mode is provided."""

    def __init__(self, mode: str, valid_modes: list):
        self.mode = mode
        self.valid_modes = valid_modes
        message = f"Invalid second operand '{mode}'. Must be one of: {valid_modes}"
        super().__init__(message)


class EmptyOperationsError(BatchConfigError):
    """Raised when the operations list is empty."""

    def __init__(self):
        message = "Operations list cannot be empty"
        super().__init__(message)
