import os
import sys
import argparse

# Add the src directory to Python path to import local sparse_matrix_ops
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from sparse_matrix_ops import SparseMatrixBatchRunner, BatchConfig, SparseMatrixError


def main():
    script_dir = os.path.dirname(os.path.abspath(__file__))

    parser = argparse.ArgumentParser(description='Add, subtract and multiply every sparse matrix file in a directory')
    parser.add_argument('--input-dir', type=str, default=os.path.join(script_dir, 'Inputs'))
    parser.add_argument('--output-dir', type=str, default=os.path.join(script_dir, 'Outputs'))
    parser.add_argument('--second-operand', type=str, default='zero', choices=['zero', 'self'])
    parser.add_argument('--operations', type=str, nargs='+', default=['add', 'subtract', 'multiply'], choices=['add', 'subtract', 'multiply'])
    parser.add_argument('--skip-invalid-files', action='store_true')
    args = parser.parse_args()

    config = BatchConfig(input_dir=args.input_dir,
                         output_dir=args.output_dir,
                         operations=args.operations,
                         second_operand=args.second_operand,
                         skip_invalid_files=args.skip_invalid_files)
    runner = SparseMatrixBatchRunner(config)
    try:
        runner.run()
    except SparseMatrixError as e:
        print(e)
        sys.exit(1)
    print(f"Summary saved to {runner.export_summary()}")


if __name__ == '__main__':
    main()
