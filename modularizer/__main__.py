from modularizer.orchestrator import main

if __name__ == "__main__":
    main()
