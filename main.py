from sky_runner.game import main


if __name__ == "__main__":
    main()
