from probe_service.server import main

main()
