ROWS_KEY = "rows"
COLS_KEY = "cols"

OPERATIONS = ['add', 'subtract', 'multiply']
SECOND_OPERANDS = ['zero', 'self']

class ResultSuffix:
    ADD = "_additionResult.txt"
    SUBTRACT = "_subtractionResult.txt"
    MULTIPLY = "_multiplicationResult.txt"

    @staticmethod
    def for_operation(operation: str) -> str:
        return {
            'add': ResultSuffix.ADD,
            'subtract': ResultSuffix.SUBTRACT,
            'multiply': ResultSuffix.MULTIPLY,
        }[operation]


class SummaryColumn:
    FILE = "file"
    ROWS = "rows"
    COLS = "cols"
    NNZ = "nnz"
    OPERATION = "operation"
    RESULT_NNZ = "result_nnz"
    OUTPUT = "output"
    STATUS = "status"
    ERROR = "error"
