import os
import time
import pandas as pd
from typing import Optional

from .config import BatchConfig
from .constants import ResultSuffix, SummaryColumn
from .matrix_errors import NoInputFilesError, SparseMatrixError
from .matrix_io import read_matrix_file, write_matrix_file
from .sparse_matrix import SparseMatrix


class SparseMatrixBatchRunner:
    """
    Runs the configured arithmetic operations over every matrix file in a directory.

    Each input file is loaded as the first operand, paired with a second operand
    built per ``BatchConfig.second_operand``, and every result is written next to
    the others in the output directory as ``<stem>_<operation>Result.txt``.
    """

    def __init__(self, config: BatchConfig = None):
        """
        Initialize the SparseMatrixBatchRunner

        Args:
            config: BatchConfig object defining the directories and operations to run
        """
        self.config = config if config is not None else BatchConfig()
        self.config.validate()
        self.results = None

    def discover_input_files(self) -> list[str]:
        """Sorted paths of the matrix files in the input directory."""
        fns = sorted(os.listdir(self.config.input_dir))
        fps = [os.path.join(self.config.input_dir, fn) for fn in fns]
        fps = [fp for fp in fps if os.path.isfile(fp)]
        if self.config.input_extensions:
            fps = [fp for fp in fps if os.path.splitext(fp)[1] in self.config.input_extensions]
        if len(fps) == 0:
            raise NoInputFilesError(self.config.input_dir)
        return fps

    def _build_second_operand(self, matrix: SparseMatrix) -> SparseMatrix:
        if self.config.second_operand == 'self':
            return matrix
        return SparseMatrix(matrix.num_rows, matrix.num_cols)

    def _log(self, msg: str) -> None:
        if self.config.verbose:
            print(msg)

    def process_file(self, fp: str) -> list[dict]:
        """
        Load one matrix file, run every configured operation and write the results.

        Returns:
            One summary record per operation
        """
        stem = os.path.splitext(os.path.basename(fp))[0]
        left = read_matrix_file(fp, verbose=self.config.verbose)
        right = self._build_second_operand(left)

        records = []
        for operation in self.config.operations:
            record = {
                SummaryColumn.FILE: os.path.basename(fp),
                SummaryColumn.ROWS: left.num_rows,
                SummaryColumn.COLS: left.num_cols,
                SummaryColumn.NNZ: len(left),
                SummaryColumn.OPERATION: operation,
                SummaryColumn.RESULT_NNZ: None,
                SummaryColumn.OUTPUT: None,
                SummaryColumn.STATUS: 'ok',
                SummaryColumn.ERROR: None,
            }

            if operation == 'multiply' and left.num_cols != right.num_rows:
                self._log(f"Skipping multiplication for {os.path.basename(fp)}. Number of columns in the first matrix "
                          f"does not match the number of rows in the second matrix.")
                record[SummaryColumn.STATUS] = 'skipped'
                records.append(record)
                continue

            if operation == 'add':
                result, label = left.add(right), 'Addition'
            elif operation == 'subtract':
                result, label = left.subtract(right), 'Subtraction'
            else:
                result, label = left.multiply(right), 'Multiplication'

            output_fp = os.path.join(self.config.output_dir, f"{stem}{ResultSuffix.for_operation(operation)}")
            write_matrix_file(result, output_fp)
            self._log(f"{label} Result saved to {output_fp}")

            record[SummaryColumn.RESULT_NNZ] = len(result)
            record[SummaryColumn.OUTPUT] = output_fp
            records.append(record)
        return records

    def run(self) -> list[dict]:
        """
        Process every input file and return the per-operation summary records.

        Raises:
            NoInputFilesError: If the input directory holds no matrix files
            SparseMatrixError: If a file fails and skip_invalid_files is False
        """
        self._log(f"=== Running sparse matrix batch on {self.config.input_dir} ===")
        start_time = time.time()
        os.makedirs(self.config.output_dir, exist_ok=True)

        fps = self.discover_input_files()
        self.results = []
        nb_failed = 0
        for fp in fps:
            st = time.time()
            try:
                self.results.extend(self.process_file(fp))
            except SparseMatrixError as e:
                if not self.config.skip_invalid_files:
                    raise
                nb_failed += 1
                self._log(f"Warning: skipping {fp}: {e}")
                self.results.append({
                    SummaryColumn.FILE: os.path.basename(fp),
                    SummaryColumn.STATUS: 'failed',
                    SummaryColumn.ERROR: str(e),
                })
                continue
            self._log(f"  took: {time.time() - st} seconds")

        self._log(f"Total time taken: {time.time() - start_time} seconds")
        self._log(f"Number of files: {len(fps)} ({nb_failed} failed)")
        return self.results

    def get_results(self) -> list[dict]:
        """
        Get the summary records of the last run
        """
        return self.results

    def export_summary(self, output_dir: Optional[str] = None) -> Optional[str]:
        """Write the summary records of the last run to batch_summary.csv and return its path."""
        if self.results is None:
            print("Warning: batch results are not available")
            return None

        output_dir = output_dir if output_dir is not None else self.config.output_dir
        os.makedirs(output_dir, exist_ok=True)

        columns = [SummaryColumn.FILE, SummaryColumn.ROWS, SummaryColumn.COLS, SummaryColumn.NNZ,
                   SummaryColumn.OPERATION, SummaryColumn.RESULT_NNZ, SummaryColumn.OUTPUT,
                   SummaryColumn.STATUS, SummaryColumn.ERROR]
        df = pd.DataFrame(self.results, columns=columns)
        output_file = os.path.join(output_dir, 'batch_summary.csv')
        df.to_csv(output_file, index=False)
        return output_file
