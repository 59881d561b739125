from chip8.frontend import main

if __name__ == "__main__":
    main()
