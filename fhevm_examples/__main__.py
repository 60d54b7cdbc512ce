from fhevm_examples.cli import main

main()
