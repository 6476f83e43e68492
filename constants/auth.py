COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"
DUMMY_TOKEN = "__dummy"
