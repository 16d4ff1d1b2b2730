from neonrun.main import main

main()
