"""
seed_data.py

Reference rows loaded by `app.database.seed`. Keys match the model columns
so each entry can be passed straight to the upsert helpers.
"""

from app.database.enums import IncomePeriod, PaymentMethod

# ---------------------------------------------------
# Commercial Configuration
# ---------------------------------------------------
SUBSCRIPTION_PLANS = [
    {
        "slug": "FREE",
        "name": "Free",
        "description": "Basic access to the platform with limited features",
        "free_credits": 3,
        "wallet_limit": 5,
        "redeem_credits": 1,
        "redeem_cycle_days": 15,
        "profile_limit": 1,
        "price_monthly": 0,
        "price_yearly": 0,
        "yearly_discount_pct": 0,
        "is_default": True,
        "color": "gray",
        "features": ["1 Active Profile", "3 Free Credits", "Basic Search", "Limited Messaging"],
    },
    {
        "slug": "STANDARD",
        "name": "Standard",
        "description": "Great for getting started with more visibility",
        "free_credits": 5,
        "wallet_limit": 10,
        "redeem_credits": 2,
        "redeem_cycle_days": 20,
        "profile_limit": 1,
        "price_monthly": 5,
        "price_yearly": 52.20,
        "yearly_discount_pct": 13,
        "color": "blue",
        "features": ["1 Active Profile", "5 Free Credits", "Enhanced Search", "Priority Support"],
    },
    {
        "slug": "SILVER",
        "name": "Silver",
        "description": "Perfect for serious matchmaking with multiple profiles",
        "free_credits": 15,
        "wallet_limit": 15,
        "redeem_credits": 5,
        "redeem_cycle_days": 30,
        "profile_limit": 3,
        "price_monthly": 9,
        "price_yearly": 93.96,
        "yearly_discount_pct": 13,
        "color": "slate",
        "features": ["3 Active Profiles", "15 Free Credits", "Advanced Filters", "Profile Boost"],
    },
    {
        "slug": "GOLD",
        "name": "Gold",
        "description": "Premium features for dedicated matchmakers",
        "free_credits": 25,
        "wallet_limit": 25,
        "redeem_credits": 5,
        "redeem_cycle_days": 30,
        "profile_limit": 5,
        "price_monthly": 15,
        "price_yearly": 160.20,
        "yearly_discount_pct": 11,
        "color": "yellow",
        "features": ["5 Active Profiles", "25 Free Credits", "Verified Badge", "Who Viewed Me"],
    },
    {
        "slug": "PLATINUM",
        "name": "Platinum",
        "description": "Elite access with maximum visibility and features",
        "free_credits": 50,
        "wallet_limit": 50,
        "redeem_credits": 5,
        "redeem_cycle_days": 30,
        "profile_limit": 10,
        "price_monthly": 25,
        "price_yearly": 267.00,
        "yearly_discount_pct": 11,
        "color": "purple",
        "features": ["10 Active Profiles", "50 Free Credits", "Top Search Priority", "Dedicated Support"],
    },
    {
        "slug": "PRO",
        "name": "Pro",
        "description": "Ultimate plan for consultants and matchmaking professionals",
        "free_credits": 50,
        "wallet_limit": 50,
        "redeem_credits": 5,
        "redeem_cycle_days": 30,
        "profile_limit": 50,
        "price_monthly": 99,
        "price_yearly": 1057.32,
        "yearly_discount_pct": 11,
        "color": "emerald",
        "features": ["50 Active Profiles", "Unlimited Credits", "White Glove Service", "API Access"],
    },
]

CREDIT_ACTIONS = [
    ("REQUEST_CONNECTION", "Request Connection", "Send a connection request to another user", "connection", 1, None),
    ("ACCESS_PHOTOS", "Access Profile Photos", "View all photos of a profile", "access", 2, None),
    ("ACCESS_INCOME", "Access Income Details", "View income information of a profile", "access", 2, None),
    ("ACCESS_CONTACT", "Access Contact Information", "View contact details of a profile", "access", 10, None),
    ("DIRECT_MESSAGE", "Direct Message", "Send a direct message to a user without connection", "connection", 10, None),
    ("BOOST_WEEK", "Boost Visibility (1 Week)", "Increase profile visibility for 7 days", "boost", 7, 7),
    ("BOOST_FORTNIGHT", "Boost Visibility (15 Days)", "Increase profile visibility for 15 days", "boost", 15, 15),
]

# slug, name, credits, price, savings_percent, is_popular
CREDIT_PACKAGES = [
    ("PACK_5", "Starter Pack", 5, 15, None, False),
    ("PACK_7", "Basic Pack", 7, 17, 19, False),
    ("PACK_11", "Value Pack", 11, 20, 39, True),
    ("PACK_17", "Premium Pack", 17, 25, 51, False),
    ("PACK_23", "Ultimate Pack", 23, 30, 57, False),
]

PAYMENT_SETTINGS = [
    {
        "method": PaymentMethod.BANK_TRANSFER,
        "label": "Bank Transfer",
        "instructions": (
            "Please transfer the exact amount to our bank account. Include your request "
            "number in the transfer reference/description.\n\n"
            "Processing time: 1-2 business days after payment confirmation."
        ),
        "bank_name": "HBL (Habib Bank Limited)",
        "account_title": "NikahFirst Services",
        "account_number": "1234567890123",
        "iban": "PK00HABB0001234567890123",
        "mobile_number": None,
    },
    {
        "method": PaymentMethod.JAZZCASH,
        "label": "JazzCash",
        "instructions": (
            "Send payment to our JazzCash account. Include your request number in the "
            "reference.\n\nProcessing time: Same day after payment confirmation."
        ),
        "bank_name": None,
        "account_title": "NikahFirst Services",
        "account_number": None,
        "iban": None,
        "mobile_number": "03001234567",
    },
    {
        "method": PaymentMethod.EASYPAISA,
        "label": "EasyPaisa",
        "instructions": (
            "Send payment to our EasyPaisa account. Include your request number in the "
            "reference.\n\nProcessing time: Same day after payment confirmation."
        ),
        "bank_name": None,
        "account_title": "NikahFirst Services",
        "account_number": None,
        "iban": None,
        "mobile_number": "03451234567",
    },
]

REDEEM_ACTIONS = [
    {
        "slug": "PROFILE_COMPLETION",
        "name": "Complete Your Profile",
        "description": "Awarded once when a profile reaches 100% completion",
        "credits_awarded": 2,
        "is_one_time": True,
    },
]

# ---------------------------------------------------
# Origins > Ethnicities
# ---------------------------------------------------
# slug, label, label_native, emoji, ethnicities (slug, label, label_native, is_popular)
ORIGINS = [
    (
        "pakistani", "Pakistani", "پاکستانی", "🇵🇰",
        [
            ("punjabi", "Punjabi", "پنجابی", True),
            ("sindhi", "Sindhi", "سندھی", True),
            ("pashtun", "Pashtun/Pathan", "پشتون", True),
            ("balochi", "Balochi", "بلوچی", True),
            ("muhajir", "Muhajir/Urdu Speaking", "مہاجر", True),
            ("kashmiri", "Kashmiri", "کشمیری", True),
            ("saraiki", "Saraiki", "سرائیکی", False),
            ("hazara", "Hazara", "ہزارہ", False),
            ("gilgiti", "Gilgiti", "گلگتی", False),
            ("baltistani", "Baltistani", "بلتستانی", False),
            ("chitrali", "Chitrali", "چترالی", False),
            ("brahui", "Brahui", "براہوی", False),
            ("hindko", "Hindko", "ہندکو", False),
            ("other_pakistani", "Other", None, False),
        ],
    ),
    (
        "indian", "Indian", "भारतीय", "🇮🇳",
        [
            ("indian_punjabi", "Punjabi", None, True),
            ("indian_gujarati", "Gujarati", None, True),
            ("indian_hyderabadi", "Hyderabadi", None, True),
            ("indian_kashmiri", "Kashmiri", None, True),
            ("indian_malayali", "Malayali", None, False),
            ("indian_tamil", "Tamil", None, False),
            ("indian_bengali", "Bengali", None, False),
            ("indian_bihari", "Bihari", None, False),
            ("indian_other", "Other", None, False),
        ],
    ),
    ("bangladeshi", "Bangladeshi", "বাংলাদেশী", "🇧🇩", [("bengali", "Bengali", None, True)]),
]

# Origins that get a single ethnicity named after themselves (`<slug>_default`).
SINGLE_LEVEL_ORIGINS = [
    ("arab", "Arab", "🌍"),
    ("afghan", "Afghan", "🇦🇫"),
    ("turkish", "Turkish", "🇹🇷"),
    ("indonesian", "Indonesian", "🇮🇩"),
    ("malaysian", "Malaysian", "🇲🇾"),
    ("african", "African", "🌍"),
    ("european_convert", "European (Convert)", "🌍"),
    ("american_convert", "American (Convert)", "🌎"),
    ("other", "Other", "🌐"),
]

# ---------------------------------------------------
# Sects > Maslaks
# ---------------------------------------------------
SECTS = [
    (
        "sunni", "Sunni",
        [
            ("hanafi", "Hanafi"),
            ("barelvi", "Barelvi"),
            ("deobandi", "Deobandi"),
            ("ahle_hadith", "Ahle Hadith / Salafi"),
            ("shafii", "Shafi'i"),
            ("maliki", "Maliki"),
            ("hanbali", "Hanbali"),
            ("sunni_other", "Other Sunni"),
        ],
    ),
    (
        "shia", "Shia",
        [
            ("twelver", "Twelver (Ithna Ashari)"),
            ("ismaili", "Ismaili"),
            ("bohra", "Bohra"),
            ("zaydi", "Zaydi"),
            ("shia_other", "Other Shia"),
        ],
    ),
]

SINGLE_LEVEL_SECTS = [
    ("ahmadiyya", "Ahmadiyya"),
    ("just_muslim", "Just Muslim"),
    ("other_sect", "Other"),
]

# ---------------------------------------------------
# Countries > States > Cities
# ---------------------------------------------------
# code, name, phone_code, currency; sort_order follows list position
COUNTRIES = [
    ("PK", "Pakistan", "+92", "PKR"),
    ("SA", "Saudi Arabia", "+966", "SAR"),
    ("AE", "United Arab Emirates", "+971", "AED"),
    ("QA", "Qatar", "+974", "QAR"),
    ("KW", "Kuwait", "+965", "KWD"),
    ("BH", "Bahrain", "+973", "BHD"),
    ("OM", "Oman", "+968", "OMR"),
    ("US", "United States", "+1", "USD"),
    ("GB", "United Kingdom", "+44", "GBP"),
    ("CA", "Canada", "+1", "CAD"),
    ("AU", "Australia", "+61", "AUD"),
    ("DE", "Germany", "+49", "EUR"),
    ("FR", "France", "+33", "EUR"),
    ("IT", "Italy", "+39", "EUR"),
    ("ES", "Spain", "+34", "EUR"),
    ("NL", "Netherlands", "+31", "EUR"),
    ("BE", "Belgium", "+32", "EUR"),
    ("SE", "Sweden", "+46", "SEK"),
    ("NO", "Norway", "+47", "NOK"),
    ("DK", "Denmark", "+45", "DKK"),
    ("AT", "Austria", "+43", "EUR"),
    ("CH", "Switzerland", "+41", "CHF"),
    ("IE", "Ireland", "+353", "EUR"),
    ("FI", "Finland", "+358", "EUR"),
    ("PT", "Portugal", "+351", "EUR"),
    ("GR", "Greece", "+30", "EUR"),
    ("PL", "Poland", "+48", "PLN"),
    ("MY", "Malaysia", "+60", "MYR"),
    ("SG", "Singapore", "+65", "SGD"),
    ("TR", "Turkey", "+90", "TRY"),
    ("ID", "Indonesia", "+62", "IDR"),
    ("IN", "India", "+91", "INR"),
    ("BD", "Bangladesh", "+880", "BDT"),
    ("JP", "Japan", "+81", "JPY"),
    ("KR", "South Korea", "+82", "KRW"),
    ("CN", "China", "+86", "CNY"),
    ("HK", "Hong Kong", "+852", "HKD"),
    ("TH", "Thailand", "+66", "THB"),
    ("PH", "Philippines", "+63", "PHP"),
    ("VN", "Vietnam", "+84", "VND"),
    ("EG", "Egypt", "+20", "EGP"),
    ("JO", "Jordan", "+962", "JOD"),
    ("LB", "Lebanon", "+961", "LBP"),
    ("IQ", "Iraq", "+964", "IQD"),
    ("MA", "Morocco", "+212", "MAD"),
    ("TN", "Tunisia", "+216", "TND"),
    ("DZ", "Algeria", "+213", "DZD"),
    ("LY", "Libya", "+218", "LYD"),
    ("IR", "Iran", "+98", "IRR"),
    ("AF", "Afghanistan", "+93", "AFN"),
    ("ZA", "South Africa", "+27", "ZAR"),
    ("NG", "Nigeria", "+234", "NGN"),
    ("KE", "Kenya", "+254", "KES"),
    ("SD", "Sudan", "+249", "SDG"),
    ("ET", "Ethiopia", "+251", "ETB"),
    ("SO", "Somalia", "+252", "SOS"),
    ("MX", "Mexico", "+52", "MXN"),
    ("BR", "Brazil", "+55", "BRL"),
    ("AR", "Argentina", "+54", "ARS"),
    ("NZ", "New Zealand", "+64", "NZD"),
    ("RU", "Russia", "+7", "RUB"),
    ("UA", "Ukraine", "+380", "UAH"),
    ("CZ", "Czech Republic", "+420", "CZK"),
    ("HU", "Hungary", "+36", "HUF"),
    ("RO", "Romania", "+40", "RON"),
]

# country code -> (popular city count per state, [(state code, state name, [cities])])
REGIONS = {
    "PK": (
        5,
        [
            ("ICT", "Islamabad Capital Territory", ["Islamabad"]),
            (
                "PB", "Punjab",
                [
                    "Lahore", "Faisalabad", "Rawalpindi", "Multan", "Gujranwala", "Sialkot",
                    "Bahawalpur", "Sargodha", "Gujrat", "Sheikhupura", "Sahiwal", "Rahim Yar Khan",
                    "Jhang", "Kasur", "Okara", "Dera Ghazi Khan", "Chiniot", "Kamoke", "Hafizabad",
                    "Mandi Bahauddin", "Jhelum", "Attock", "Chakwal", "Khanewal", "Vehari",
                    "Muzaffargarh", "Layyah", "Mianwali", "Bhakkar", "Khushab", "Narowal",
                    "Pakpattan", "Lodhran", "Rajanpur", "Toba Tek Singh",
                ],
            ),
            (
                "SD", "Sindh",
                [
                    "Karachi", "Hyderabad", "Sukkur", "Larkana", "Nawabshah", "Mirpur Khas",
                    "Thatta", "Jacobabad", "Shikarpur", "Khairpur", "Dadu", "Badin", "Tando Adam",
                    "Tando Allahyar", "Matiari", "Umerkot", "Sanghar", "Ghotki", "Kashmore",
                ],
            ),
            (
                "KP", "Khyber Pakhtunkhwa",
                [
                    "Peshawar", "Mardan", "Abbottabad", "Swat", "Kohat", "Dera Ismail Khan",
                    "Bannu", "Mansehra", "Charsadda", "Nowshera", "Swabi", "Haripur", "Chitral",
                    "Dir", "Buner", "Shangla", "Battagram", "Kohistan", "Hangu", "Karak",
                    "Lakki Marwat", "Tank",
                ],
            ),
            (
                "BA", "Balochistan",
                [
                    "Quetta", "Gwadar", "Turbat", "Khuzdar", "Hub", "Chaman", "Sibi", "Zhob",
                    "Loralai", "Mastung", "Pishin", "Kalat", "Nushki", "Kharan", "Panjgur",
                    "Lasbela", "Awaran", "Washuk",
                ],
            ),
            (
                "GB", "Gilgit-Baltistan",
                [
                    "Gilgit", "Skardu", "Hunza", "Ghizer", "Diamer", "Astore", "Ghanche",
                    "Shigar", "Kharmang", "Roundu",
                ],
            ),
            (
                "AK", "Azad Kashmir",
                [
                    "Muzaffarabad", "Mirpur", "Kotli", "Bhimber", "Rawalakot", "Bagh",
                    "Pallandri", "Hajira", "Athmuqam", "Neelum",
                ],
            ),
        ],
    ),
    "AE": (
        1,
        [
            (None, emirate, [emirate])
            for emirate in (
                "Dubai", "Abu Dhabi", "Sharjah", "Ajman", "Ras Al Khaimah", "Fujairah",
                "Umm Al Quwain",
            )
        ],
    ),
    "SA": (
        2,
        [
            (None, "Riyadh Region", ["Riyadh", "Al Kharj", "Diriyah"]),
            (None, "Makkah Region", ["Makkah", "Jeddah", "Taif"]),
            (None, "Madinah Region", ["Madinah", "Yanbu"]),
            (None, "Eastern Province", ["Dammam", "Dhahran", "Khobar", "Jubail", "Qatif"]),
            (None, "Asir Region", ["Abha", "Khamis Mushait"]),
            (None, "Qassim Region", ["Buraydah", "Unaizah"]),
            (None, "Tabuk Region", ["Tabuk"]),
            (None, "Hail Region", ["Hail"]),
            (None, "Jazan Region", ["Jazan"]),
            (None, "Najran Region", ["Najran"]),
        ],
    ),
    "GB": (
        5,
        [
            (
                None, "England",
                [
                    "London", "Birmingham", "Manchester", "Leeds", "Liverpool", "Bradford",
                    "Sheffield", "Bristol", "Leicester", "Luton", "Coventry", "Nottingham",
                    "Newcastle", "Southampton", "Reading", "Derby", "Plymouth", "Wolverhampton",
                    "Milton Keynes", "Oxford", "Cambridge",
                ],
            ),
            (None, "Scotland", ["Glasgow", "Edinburgh", "Aberdeen", "Dundee"]),
            (None, "Wales", ["Cardiff", "Swansea", "Newport"]),
            (None, "Northern Ireland", ["Belfast", "Derry"]),
        ],
    ),
    "US": (
        3,
        [
            (None, "California", ["Los Angeles", "San Francisco", "San Diego", "San Jose", "Fresno", "Sacramento", "Irvine", "Anaheim"]),
            (None, "Texas", ["Houston", "Dallas", "Austin", "San Antonio", "Fort Worth", "El Paso", "Arlington", "Plano"]),
            (None, "New York", ["New York City", "Buffalo", "Rochester", "Syracuse", "Albany"]),
            (None, "Florida", ["Miami", "Orlando", "Tampa", "Jacksonville", "Fort Lauderdale"]),
            (None, "Illinois", ["Chicago", "Aurora", "Naperville", "Rockford"]),
            (None, "New Jersey", ["Newark", "Jersey City", "Paterson", "Elizabeth", "Edison", "Trenton"]),
            (None, "Pennsylvania", ["Philadelphia", "Pittsburgh", "Allentown", "Reading"]),
            (None, "Michigan", ["Detroit", "Grand Rapids", "Warren", "Ann Arbor", "Dearborn"]),
            (None, "Georgia", ["Atlanta", "Augusta", "Columbus", "Savannah"]),
            (None, "Virginia", ["Virginia Beach", "Norfolk", "Richmond", "Chesapeake", "Arlington"]),
            (None, "Massachusetts", ["Boston", "Worcester", "Springfield", "Cambridge"]),
            (None, "Washington", ["Seattle", "Spokane", "Tacoma", "Bellevue"]),
            (None, "Maryland", ["Baltimore", "Columbia", "Germantown", "Silver Spring"]),
            (None, "Arizona", ["Phoenix", "Tucson", "Mesa", "Scottsdale"]),
            (None, "Ohio", ["Columbus", "Cleveland", "Cincinnati", "Toledo"]),
            (None, "Colorado", ["Denver", "Colorado Springs", "Aurora", "Boulder"]),
            (None, "Minnesota", ["Minneapolis", "Saint Paul", "Rochester"]),
            (None, "Connecticut", ["Bridgeport", "New Haven", "Hartford", "Stamford"]),
        ],
    ),
    "CA": (
        3,
        [
            (None, "Ontario", ["Toronto", "Ottawa", "Mississauga", "Brampton", "Hamilton", "London", "Markham", "Vaughan", "Kitchener", "Windsor"]),
            (None, "British Columbia", ["Vancouver", "Surrey", "Burnaby", "Richmond", "Victoria", "Kelowna"]),
            (None, "Quebec", ["Montreal", "Quebec City", "Laval", "Gatineau", "Longueuil"]),
            (None, "Alberta", ["Calgary", "Edmonton", "Red Deer", "Lethbridge"]),
            (None, "Manitoba", ["Winnipeg", "Brandon"]),
            (None, "Saskatchewan", ["Saskatoon", "Regina"]),
        ],
    ),
    "AU": (
        2,
        [
            (None, "New South Wales", ["Sydney", "Newcastle", "Wollongong", "Central Coast"]),
            (None, "Victoria", ["Melbourne", "Geelong", "Ballarat", "Bendigo"]),
            (None, "Queensland", ["Brisbane", "Gold Coast", "Sunshine Coast", "Townsville", "Cairns"]),
            (None, "Western Australia", ["Perth", "Fremantle", "Mandurah"]),
            (None, "South Australia", ["Adelaide"]),
            (None, "Australian Capital Territory", ["Canberra"]),
        ],
    ),
}

# ---------------------------------------------------
# Flat Lookups
# ---------------------------------------------------
def build_heights() -> list[dict]:
    """4'6" through 6'8" in one-inch steps."""
    heights = []
    for feet in range(4, 7):
        start = 6 if feet == 4 else 0
        stop = 8 if feet == 6 else 11
        for inches in range(start, stop + 1):
            cm = round((feet * 12 + inches) * 2.54)
            heights.append(
                {
                    "slug": f"{feet}ft{inches}in",
                    "label_imperial": f"{feet}'{inches}\"",
                    "label_metric": f"{cm} cm",
                    "centimeters": cm,
                    "sort_order": len(heights),
                }
            )
    return heights


# slug, label, level, years_of_education, tags
EDUCATION_LEVELS = [
    ("below_matric", "Below Matriculation", 1, 8, []),
    ("matric", "Matriculation (10th)", 2, 10, []),
    ("intermediate", "Intermediate (12th / FSc / FA)", 3, 12, []),
    ("diploma", "Diploma / Certificate", 4, 13, []),
    ("bachelors", "Bachelor's Degree", 5, 16, []),
    ("masters", "Master's Degree", 6, 18, []),
    ("mphil", "M.Phil / MS", 7, 18, []),
    ("phd", "PhD / Doctorate", 8, 21, []),
    ("postdoc", "Post Doctorate", 9, 23, []),
    ("islamic_scholar", "Islamic Scholar (Aalim/Mufti)", 5, 16, ["islamic", "religious"]),
    ("hafiz", "Hafiz-e-Quran", 3, 12, ["islamic", "religious"]),
]

# category -> (first sort_order, [(slug, label)])
EDUCATION_FIELDS = {
    "Engineering & Technology": (
        0,
        [
            ("computer_science", "Computer Science / IT"),
            ("software_engineering", "Software Engineering"),
            ("electrical_engineering", "Electrical Engineering"),
            ("mechanical_engineering", "Mechanical Engineering"),
            ("civil_engineering", "Civil Engineering"),
            ("chemical_engineering", "Chemical Engineering"),
            ("other_engineering", "Other Engineering"),
        ],
    ),
    "Medical & Health": (
        10,
        [
            ("medicine_mbbs", "Medicine (MBBS)"),
            ("dentistry", "Dentistry (BDS)"),
            ("pharmacy", "Pharmacy"),
            ("nursing", "Nursing"),
            ("physiotherapy", "Physiotherapy"),
            ("psychology", "Psychology"),
            ("other_medical", "Other Medical/Health"),
        ],
    ),
    "Business & Commerce": (
        20,
        [
            ("business_admin", "Business Administration (BBA/MBA)"),
            ("accounting", "Accounting / Finance"),
            ("economics", "Economics"),
            ("marketing", "Marketing"),
            ("commerce", "Commerce"),
            ("banking", "Banking"),
        ],
    ),
    "Law & Social Sciences": (
        30,
        [
            ("law", "Law (LLB/LLM)"),
            ("political_science", "Political Science"),
            ("sociology", "Sociology"),
            ("international_relations", "International Relations"),
            ("social_work", "Social Work"),
        ],
    ),
    "Arts & Humanities": (
        40,
        [
            ("english", "English Literature/Language"),
            ("urdu", "Urdu Literature"),
            ("arabic", "Arabic"),
            ("history", "History"),
            ("philosophy", "Philosophy"),
            ("journalism", "Journalism / Mass Communication"),
            ("fine_arts", "Fine Arts / Design"),
        ],
    ),
    "Natural Sciences": (
        50,
        [
            ("physics", "Physics"),
            ("chemistry", "Chemistry"),
            ("mathematics", "Mathematics"),
            ("biology", "Biology / Biotechnology"),
            ("environmental", "Environmental Science"),
        ],
    ),
    "Islamic Studies": (
        60,
        [
            ("islamic_studies", "Islamic Studies"),
            ("quran_tafsir", "Quran & Tafsir"),
            ("hadith", "Hadith Sciences"),
            ("fiqh", "Fiqh (Islamic Jurisprudence)"),
        ],
    ),
    "Education": (70, [("education", "Education / Teaching")]),
    "Other": (
        80,
        [
            ("agriculture", "Agriculture"),
            ("architecture", "Architecture"),
            ("aviation", "Aviation / Aeronautics"),
            ("hospitality", "Hospitality / Hotel Management"),
        ],
    ),
}
# Catch-all field sorted last
OTHER_EDUCATION_FIELD = ("other_field", "Other", "Other", 99)

# slug, label, min_value, max_value
USD_INCOME_RANGES = [
    ("usd_0_25k", "Under $25,000", 0, 25000),
    ("usd_25k_50k", "$25,000 - $50,000", 25000, 50000),
    ("usd_50k_75k", "$50,000 - $75,000", 50000, 75000),
    ("usd_75k_100k", "$75,000 - $100,000", 75000, 100000),
    ("usd_100k_150k", "$100,000 - $150,000", 100000, 150000),
    ("usd_150k_200k", "$150,000 - $200,000", 150000, 200000),
    ("usd_200k_plus", "$200,000+", 200000, None),
]
PKR_INCOME_RANGES = [
    ("pkr_0_50k", "Under Rs. 50,000", 0, 50000),
    ("pkr_50k_100k", "Rs. 50,000 - Rs. 100,000", 50000, 100000),
    ("pkr_100k_200k", "Rs. 100,000 - Rs. 200,000", 100000, 200000),
    ("pkr_200k_300k", "Rs. 200,000 - Rs. 300,000", 200000, 300000),
    ("pkr_300k_500k", "Rs. 300,000 - Rs. 500,000", 300000, 500000),
    ("pkr_500k_1m", "Rs. 500,000 - Rs. 1,000,000", 500000, 1000000),
    ("pkr_1m_plus", "Rs. 1,000,000+", 1000000, None),
]
# currency -> (period, ranges, origin slug)
INCOME_RANGES = {
    "USD": (IncomePeriod.ANNUAL, USD_INCOME_RANGES, None),
    "PKR": (IncomePeriod.MONTHLY, PKR_INCOME_RANGES, "pakistani"),
}

# code, slug, label, label_native
LANGUAGES = [
    ("ur", "urdu", "Urdu", "اردو"),
    ("en", "english", "English", "English"),
    ("pa", "punjabi", "Punjabi", "پنجابی"),
    ("ps", "pashto", "Pashto", "پښتو"),
    ("sd", "sindhi", "Sindhi", "سنڌي"),
    ("bal", "balochi", "Balochi", "بلوچی"),
    ("skr", "saraiki", "Saraiki", "سرائیکی"),
    ("kas", "kashmiri", "Kashmiri", "کٲشُر"),
    ("hnd", "hindko", "Hindko", "ہندکو"),
    ("ar", "arabic", "Arabic", "العربية"),
    ("hi", "hindi", "Hindi", "हिन्दी"),
    ("bn", "bengali", "Bengali", "বাংলা"),
    ("fa", "persian", "Persian/Farsi", "فارسی"),
    ("tr", "turkish", "Turkish", "Türkçe"),
    ("de", "german", "German", "Deutsch"),
    ("fr", "french", "French", "Français"),
    ("es", "spanish", "Spanish", "Español"),
    ("zh", "chinese", "Chinese", "中文"),
]
OTHER_LANGUAGE = ("other", "other_language", "Other", None)
